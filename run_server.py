"""
Run the StockSignal backend server.
"""
import os

from dotenv import load_dotenv
import uvicorn

# Load environment
project_dir = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(project_dir, ".env"))

from stocksignal.core.config import settings  # noqa: E402

if __name__ == "__main__":
    print("Starting StockSignal Backend Server...")
    print(f"API Docs: http://{settings.host}:{settings.port}/docs")
    print("-" * 50)

    uvicorn.run(
        "stocksignal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
