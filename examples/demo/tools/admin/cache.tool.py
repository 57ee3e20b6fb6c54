import asyncio


async def clear_cache(params=None):
    await asyncio.sleep(0.1)
    return {"cleared": True}


tool = {
    "id": "clear-cache",
    "title": "Clear Cache",
    "content": {
        "type": "actionButton",
        "description": "Drop every cached report.",
        "action": {"functionName": "clearCache"},
        "buttonConfig": {"label": "Clear", "confirmationMessage": "Clear the cache?"},
    },
    "functions": {"clearCache": clear_cache},
}
