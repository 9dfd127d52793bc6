import asyncio
import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from core.exceptions import ClientInputError
from core.types import Currency
from dashboard.broadcast import Subscription

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scorecard Stream"])

@router.websocket("/ws/scorecards")
async def scorecard_stream(websocket: WebSocket):
    """
    Push committed scorecards of subscribed currencies.

    Client messages:
        {"action": "subscribe", "currencies": ["USD", "EUR"]}
        {"action": "unsubscribe", "currencies": ["EUR"]}

    A subscribe without currencies subscribes to every currency.
    """
    await websocket.accept()

    broadcaster = websocket.app.state.broadcaster
    subscription = broadcaster.register(asyncio.get_running_loop())
    sender = asyncio.create_task(_forward(websocket, subscription))

    try:
        while True:
            text = await websocket.receive_text()
            _handle_message(text, subscription)
    except WebSocketDisconnect:
        logger.debug("WebSocket client disconnected")
    finally:
        broadcaster.unregister(subscription)
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"WebSocket sender stopped: {e}")

async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    """Single writer for the socket: acks and updates share one queue."""
    while True:
        message = await subscription.queue.get()
        await websocket.send_json(message)

def _handle_message(text: str, subscription: Subscription) -> None:
    try:
        message = json.loads(text)
    except ValueError:
        subscription.send(_error("Message must be JSON"))
        return

    if not isinstance(message, dict):
        subscription.send(_error("Message must be a JSON object"))
        return

    action = message.get("action")
    if action not in ("subscribe", "unsubscribe"):
        subscription.send(_error(f"Unknown action: {action}"))
        return

    try:
        currencies = _parse_currencies(message.get("currencies"))
    except ClientInputError as e:
        subscription.send(_error(e.message))
        return

    if action == "subscribe":
        subscription.subscribe(currencies)
        ack = "subscribed"
    else:
        subscription.unsubscribe(currencies)
        ack = "unsubscribed"

    subscription.send({
        "type": ack,
        "currencies": [c.value for c in Currency if c in subscription.currencies],
    })

def _parse_currencies(raw: Any) -> List[Currency]:
    if not raw:
        return Currency.all_currencies()
    if isinstance(raw, str):
        raw = [raw]
    return [Currency.parse(code) for code in raw]

def _error(message: str) -> Dict[str, Any]:
    return {"type": "error", "message": message}
