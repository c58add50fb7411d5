#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: python -m backend.run

from backend.app import create_app
from backend.core.config import load_settings

settings = load_settings()
app = create_app(settings)


if __name__ == "__main__":
    app.run(port=settings.port, debug=settings.env == "dev")
