"""Flask application with route handlers"""
from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import os
import traceback

from config.context import AppContext
from services import provisioning_service, waitlist_service
from utils.errors import UnexpectedError, WaitlistError
from utils.logger import log_error, log_info, log_warning
from utils.validation import get_json_body

api = Blueprint('api', __name__)


def get_store():
    """Store from the context the app was created with"""
    return current_app.config['APP_CONTEXT'].store


def error_response(message, status_code):
    return jsonify({"success": False, "error": message}), status_code


@api.route('/')
def home():
    return jsonify({
        "success": True,
        "message": "TefiPay Waitlist API",
        "status": "running",
        "version": "1.0.0"
    })


@api.route('/health')
def health_check():
    return jsonify({
        "success": True,
        "status": "healthy",
        "message": "API is running successfully"
    })


@api.route('/api/waitlist', methods=['POST'])
def join_waitlist():
    """Add name and email to the waitlist"""
    data = get_json_body(request)
    entry = waitlist_service.register(get_store(), data.get('name'), data.get('email'))
    return jsonify({"success": True, "data": [entry]}), 200


@api.route('/api/waitlist/status', methods=['GET'])
def waitlist_status():
    """Report whether the waitlist table exists"""
    provisioned = waitlist_service.is_provisioned(get_store())
    return jsonify({"success": True, "provisioned": provisioned}), 200


@api.route('/api/setup-database', methods=['POST'])
def setup_database():
    """Execute the operator's schema statement with the service role key"""
    data = get_json_body(request)
    provisioning_service.execute_statement(get_store(), data.get('sql'))
    return jsonify({"success": True}), 200


@api.route('/api/admin/setup', methods=['GET'])
def get_setup_status():
    """Provisioning state plus the SQL for manual setup"""
    provisioned = waitlist_service.is_provisioned(get_store())
    return jsonify({
        "success": True,
        "provisioned": provisioned,
        "sql": provisioning_service.get_schema_sql()
    }), 200


@api.route('/api/admin/setup', methods=['POST'])
def run_setup():
    """Create the waitlist table if it is missing"""
    result = provisioning_service.ensure_provisioned(get_store())
    return jsonify({"success": True, **result}), 200


@api.errorhandler(WaitlistError)
def handle_waitlist_error(e):
    if e.status_code >= 500:
        log_warning(f"{request.method} {request.path} failed: {e.message}")
    return error_response(e.message, e.status_code)


@api.app_errorhandler(HTTPException)
def handle_http_error(e):
    return error_response(e.name, e.code)


@api.errorhandler(Exception)
def handle_unexpected_error(e):
    error_trace = traceback.format_exc()
    log_error(f"Error in {request.method} {request.path}", error=e, traceback_str=error_trace)
    unexpected = UnexpectedError("Internal server error")
    return error_response(unexpected.message, unexpected.status_code)


def create_app(context=None):
    """Build the Flask app; context defaults to one configured from the environment"""
    app = Flask(__name__)
    app.config['APP_CONTEXT'] = context if context is not None else AppContext.from_env()

    origins = os.environ.get('CORS_ORIGINS', 'http://localhost:3000')
    CORS(app, resources={
        r"/api/*": {
            "origins": [o.strip() for o in origins.split(',') if o.strip()],
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"]
        }
    })

    app.register_blueprint(api)
    return app


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV') == 'development'
    log_info(f"Starting waitlist API on port {port}")
    app = create_app()
    app.run(host='0.0.0.0', port=port, debug=debug)
