"""
Flask Application Factory

Every API response is shaped as a contract (small JSON, paginated
collection, or streamed download) and dispatched through
@contract_response, so error envelopes and headers stay uniform.
"""

from flask import Flask
from flask_cors import CORS

from config import Config
from response_contracts import contract_response, create_small_contract
from response_contracts.middleware import (
    setup_error_handlers,
    setup_request_id_middleware,
    setup_request_logging_middleware,
)


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # Content-Disposition must be exposed or browsers hide download filenames
    CORS(app,
         resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         methods=["GET", "POST", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
         expose_headers=["X-Request-ID", "Content-Disposition"],
         supports_credentials=False)

    # === API CONTRACT MIDDLEWARE ===
    # Request ID injection for request correlation and debugging
    setup_request_id_middleware(app)

    # Request usage logging (sampling + watchlist)
    setup_request_logging_middleware(app)

    # Standardized error envelopes for contract, HTTP and unhandled errors
    setup_error_handlers(app)

    @app.route('/api/health', methods=['GET'])
    @contract_response
    def health():
        return create_small_contract({"status": "ok"})

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=5000, debug=app.config['DEBUG'])
