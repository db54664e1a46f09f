import asyncio
import uvicorn


async def start_servers():
    # auth: register / login / me
    auth_config = uvicorn.Config(
        "auth_service.app.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
    auth_server = uvicorn.Server(auth_config)

    # inventory: assets and their lifecycle
    inventory_config = uvicorn.Config(
        "inventory_service.app.main:app",
        host="0.0.0.0",
        port=8002,
        reload=True,
    )
    inventory_server = uvicorn.Server(inventory_config)

    # Run both servers concurrently
    await asyncio.gather(
        auth_server.serve(),
        inventory_server.serve(),
    )

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
