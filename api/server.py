from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
import logging
import os

from routes.scripture_api import scripture_bp, set_service

load_dotenv()


def create_app(service=None) -> Flask:
    """
    Build the Flask app.

    Args:
        service: Optional ScriptureService to serve (tests inject one
                 backed by a temporary book directory)
    """
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "change-me")

    CORS(app)

    if service is not None:
        set_service(service)

    app.register_blueprint(scripture_bp)
    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    create_app().run(host="127.0.0.1", port=int(os.getenv("PORT", "5055")))
