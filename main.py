import os
import warnings

# Suppress noisy warnings for cleaner output
warnings.filterwarnings('ignore', category=UserWarning, module='sklearn')

from nutrichat_app.api import create_app

app = create_app()

if __name__ == "__main__":
    print("NutriChat backend starting! API available at http://localhost:8000")
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), log_level="warning")
