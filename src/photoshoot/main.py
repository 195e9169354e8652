"""Local development server."""

import os

import uvicorn


def main() -> None:
    """Serve the ASGI app with uvicorn."""
    uvicorn.run(
        "photoshoot.api.asgi:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
