"""Run the API locally: ``python app.py`` (settings chosen by APP_ENV)."""

import os

from intern_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
