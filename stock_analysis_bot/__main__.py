"""
Entry point for running the application as a module.
"""

import os

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stock_analysis_bot.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "3000")),
    )
