"""WebSocket stream of order invalidation signals for staff dashboards."""

import asyncio

import structlog
from fastapi import APIRouter, WebSocket

from ordering.realtime.channel import ORDERS_TOPIC, get_change_channel
from ordering.staff import get_auth_gate

logger = structlog.get_logger(__name__)

stream_router = APIRouter(tags=["orders"])

INVALIDATE_MESSAGE = {"type": "invalidate", "topic": ORDERS_TOPIC}


async def _forward_signals(websocket: WebSocket, signals: asyncio.Queue) -> None:
    while True:
        message = await signals.get()
        await websocket.send_json(message)


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@stream_router.websocket("/orders/stream")
async def order_stream(websocket: WebSocket, token: str | None = None):
    """Send ``{"type": "invalidate", "topic": "orders"}`` whenever any order changes.

    Clients refetch ``GET /orders`` on every message.
    """
    if get_auth_gate().current_session(token) is None:
        await websocket.close(code=4401)
        return

    await websocket.accept()
    loop = asyncio.get_running_loop()
    signals: asyncio.Queue = asyncio.Queue()

    def on_signal():
        # Publishers run on request threads; hand the signal to this loop
        loop.call_soon_threadsafe(signals.put_nowait, INVALIDATE_MESSAGE)

    channel = get_change_channel()
    subscription = channel.subscribe(on_signal, topic=ORDERS_TOPIC)
    try:
        await websocket.send_json({"type": "subscribed", "topic": ORDERS_TOPIC})
        tasks = {
            asyncio.create_task(_forward_signals(websocket, signals)),
            asyncio.create_task(_wait_for_disconnect(websocket)),
        }
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.warning("Order stream closed with error", error=str(task.exception()))
    finally:
        channel.unsubscribe(subscription)
        logger.info("Order stream client disconnected")
