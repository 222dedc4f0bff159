"""
bottle application exposing the upload endpoints.
"""

import hmac
import logging
import os
import time
from datetime import datetime, timezone
from functools import wraps
from typing import List, Optional

from bottle import BaseRequest, Bottle, HTTPResponse, request, response

from . import __version__
from .config import DEFAULT_ALLOWED_MIME_TYPES, ServerConfig
from .exceptions import PayloadTooLargeError, ValidationError
from .upload_service import UploadFile, UploadService

BaseRequest.MEMFILE_MAX = 300 * 1024 * 1024

ENDPOINTS = {
    'health': '/health',
    'upload': {
        'portfolio': 'POST /upload/portfolio',
        'portfolioBatch': 'POST /upload/portfolio/batch',
        'event': 'POST /upload/event/:eventId',
        'eventBatch': 'POST /upload/event/:eventId/batch',
        'slideshow': 'POST /upload/slideshow',
    },
}


class RequestError(Exception):
    """Raised for client errors detected before the pipeline runs."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


def error_response(status: int, message: str) -> dict:
    response.status = status
    return {'error': message}


def allow_cross_origin(func):
    """Decorate a view function to allow cross domain access."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
        except HTTPResponse as r:
            r.set_header('Access-Control-Allow-Origin', '*')
            raise
        response.set_header('Access-Control-Allow-Origin', '*')
        return result
    return wrapper


def upload_size(upload) -> int:
    """Byte length of a multipart part, measured without reading it."""
    stream = upload.file
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size - position


def extract_api_key() -> Optional[str]:
    """Return the key from X-API-Key or an 'Authorization: Bearer' header."""
    api_key = request.get_header('X-API-Key')
    if api_key:
        return api_key
    auth_header = request.get_header('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[len('Bearer '):]
    return None


def create_app(
    config: ServerConfig,
    service: UploadService,
    storage=None,
    allowed_mime_types=DEFAULT_ALLOWED_MIME_TYPES,
    logger: Optional[logging.Logger] = None
) -> Bottle:
    """
    Build the WSGI application.

    Args:
        config: Server configuration (API key, upload limits)
        service: Upload service handling validated requests
        storage: Object store used by the health checks
        allowed_mime_types: Declared types accepted by the request pre-filter
        logger: Optional logger instance
    """
    log = logger or logging.getLogger(__name__)
    app = Bottle()
    started_at = time.time()

    def require_api_key(func):
        """Decorate a view function to require the shared API key."""
        @wraps(func)
        def wrapper(*args, **kwargs):
            supplied = extract_api_key()
            if not config.api_key or not supplied or not hmac.compare_digest(
                    supplied.encode(), config.api_key.encode()):
                log.debug(f"Rejected unauthenticated request to {request.path}")
                return error_response(401, 'Unauthorized')
            return func(*args, **kwargs)
        return wrapper

    def read_upload(upload) -> UploadFile:
        declared = upload.content_type
        if declared not in allowed_mime_types:
            raise RequestError(f"Invalid file type: {declared}")
        if upload_size(upload) > config.max_file_size:
            raise PayloadTooLargeError(config.max_file_size)
        return upload.file.read(), upload.raw_filename, declared

    def single_file() -> UploadFile:
        upload = request.files.get('file')
        if upload is None:
            raise RequestError('No file provided')
        return read_upload(upload)

    def multiple_files() -> List[UploadFile]:
        uploads = request.files.getall('files')
        if not uploads:
            raise RequestError('No files provided')
        if len(uploads) > config.max_files:
            raise RequestError(f"Too many files. Maximum: {config.max_files}")
        return [read_upload(upload) for upload in uploads]

    def handle_single(asset_type: str, scope_id: Optional[str] = None):
        try:
            image_data, original_name, declared = single_file()
            photo = service.upload(image_data, original_name, declared, asset_type, scope_id)
        except PayloadTooLargeError as e:
            return error_response(413, str(e))
        except RequestError as e:
            return error_response(e.status, str(e))
        except ValidationError as e:
            log.info(f"Rejected {asset_type} upload: {e.reason}")
            return error_response(400, e.reason)
        except ValueError as e:
            return error_response(400, str(e))
        except Exception as e:
            log.exception(f"{asset_type} upload error: {e}")
            return error_response(500, str(e) or 'Upload failed')
        return {'success': True, 'photo': photo.to_dict()}

    def handle_batch(asset_type: str, scope_id: Optional[str] = None):
        try:
            files = multiple_files()
            batch = service.upload_batch(files, asset_type, scope_id)
        except PayloadTooLargeError as e:
            return error_response(413, str(e))
        except RequestError as e:
            return error_response(e.status, str(e))
        except Exception as e:
            log.exception(f"Batch {asset_type} upload error: {e}")
            return error_response(500, str(e) or 'Upload failed')
        return batch.to_dict()

    @app.route('/')
    def index():
        return {
            'name': 'Upload API',
            'version': __version__,
            'status': 'running',
            'endpoints': ENDPOINTS,
        }

    @app.route('/health')
    def health():
        configured = storage is not None and storage.config.is_configured
        checks = {
            'status': 'ok',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'uptime': time.time() - started_at,
            'storage': 'configured' if configured else 'not configured',
        }
        if not configured:
            response.status = 503
        return checks

    @app.route('/health/storage')
    def health_storage():
        if storage is None:
            return error_response(503, 'Storage not configured')
        reachable = storage.check_bucket()
        if not reachable:
            response.status = 503
        return {
            'bucket': storage.config.bucket,
            'reachable': reachable,
        }

    @app.route('/upload/<path:path>', method='OPTIONS')
    @allow_cross_origin
    def upload_options(path):
        response.set_header('Access-Control-Allow-Methods', 'POST, OPTIONS')
        response.set_header('Access-Control-Allow-Headers', 'Content-Type, Authorization, X-API-Key')
        response.content_type = 'text/plain; charset=utf-8'
        return ''

    @app.route('/upload/portfolio', method='POST')
    @allow_cross_origin
    @require_api_key
    def upload_portfolio():
        return handle_single('portfolio')

    @app.route('/upload/portfolio/batch', method='POST')
    @allow_cross_origin
    @require_api_key
    def upload_portfolio_batch():
        return handle_batch('portfolio')

    @app.route('/upload/event/<event_id>', method='POST')
    @allow_cross_origin
    @require_api_key
    def upload_event(event_id):
        return handle_single('events', event_id)

    @app.route('/upload/event/<event_id>/batch', method='POST')
    @allow_cross_origin
    @require_api_key
    def upload_event_batch(event_id):
        return handle_batch('events', event_id)

    @app.route('/upload/slideshow', method='POST')
    @allow_cross_origin
    @require_api_key
    def upload_slideshow():
        return handle_single('slideshow')

    return app
