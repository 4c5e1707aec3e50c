# WS /ws

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def shaka_stream(websocket: WebSocket):
    """
    Live feed of new shakas as {"event": "new-shaka", "data": {...}}.

    Only events published while connected are delivered; incoming
    client messages are read and ignored.
    """
    manager = websocket.app.state.connections
    await manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
