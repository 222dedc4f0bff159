"""
Command Line Interface for the upload gateway.
"""

import argparse
import json
import logging
import os
from typing import List, Optional

from .config import ASSET_TYPES, PipelineConfig, S3Config, ServerConfig
from .exceptions import UploadApiError, ValidationError
from .image_metadata import extract_metadata
from .image_validator import ImageValidator
from .pipeline import ImagePipeline
from .s3_client import S3Client
from .thumbnail_generator import ThumbnailGenerator
from .upload_service import UploadService


def setup_logging(verbose: bool, level_name: str = 'INFO') -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return logging.getLogger('upload_api')


def warn_config_errors(errors: List[str], logger: logging.Logger) -> None:
    for error in errors:
        logger.warning(f"Configuration: {error}")


def build_service(
    s3_config: S3Config,
    pipeline_config: PipelineConfig,
    logger: logging.Logger
):
    """
    Wire the storage client, pipeline and validator together.

    Returns:
        Tuple of (UploadService, S3Client)
    """
    storage = S3Client(s3_config, logger)
    thumb_gen = ThumbnailGenerator(
        jpeg_quality=pipeline_config.jpeg_quality,
        webp_quality=pipeline_config.webp_quality,
        logger=logger,
    )
    pipeline = ImagePipeline(storage, thumb_gen, pipeline_config, logger)
    validator = ImageValidator(pipeline_config.allowed_mime_types, logger)
    return UploadService(validator, pipeline, storage, logger), storage


def read_file(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def cmd_serve(args: argparse.Namespace) -> int:
    """Execute serve command."""
    from bottle import run
    from .server import create_app

    server_config = ServerConfig.from_env()
    logger = setup_logging(args.verbose, server_config.log_level)
    if args.host:
        server_config.host = args.host
    if args.port:
        server_config.port = args.port

    s3_config = S3Config.from_env()
    pipeline_config = PipelineConfig.from_env()
    warn_config_errors(s3_config.validate() + server_config.validate(), logger)

    errors = pipeline_config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    service, storage = build_service(s3_config, pipeline_config, logger)
    app = create_app(
        server_config,
        service,
        storage,
        allowed_mime_types=pipeline_config.allowed_mime_types,
        logger=logger,
    )

    logger.info(f"Port:      {server_config.port}")
    logger.info(f"Bucket:    {s3_config.bucket}")
    logger.info(f"Endpoint:  {s3_config.endpoint or '(not set)'}")
    run(app=app, host=server_config.host, port=server_config.port, server=server_config.server)
    logger.info("Exiting.")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Validate a local image and report the thumbnail sizes it would produce."""
    logger = setup_logging(args.verbose)
    pipeline_config = PipelineConfig.from_env()

    try:
        image_data = read_file(args.file)
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1

    try:
        detected = ImageValidator(pipeline_config.allowed_mime_types, logger).validate(image_data)
    except ValidationError as e:
        print(f"Invalid: {e.reason}")
        return 1

    metadata = extract_metadata(image_data, logger)
    print(f"Format:     {detected.mime_type}")
    print(f"Dimensions: {metadata.width}x{metadata.height}")

    thumb_gen = ThumbnailGenerator(
        jpeg_quality=pipeline_config.jpeg_quality,
        webp_quality=pipeline_config.webp_quality,
        logger=logger,
    )
    failures = 0
    for size_class in pipeline_config.size_classes:
        max_dimension = pipeline_config.thumbnail_sizes[size_class]
        for encoding in pipeline_config.encodings:
            try:
                thumb = thumb_gen.generate(image_data, max_dimension, encoding)
            except UploadApiError as e:
                failures += 1
                print(f"  {size_class:<7} {encoding:<5} FAILED: {e}")
                continue
            print(f"  {size_class:<7} {encoding:<5} {thumb.width}x{thumb.height} ({len(thumb.data):,} bytes)")

    return 0 if failures == 0 else 1


def cmd_process(args: argparse.Namespace) -> int:
    """Upload a local image through the full pipeline."""
    logger = setup_logging(args.verbose)
    s3_config = S3Config.from_env()
    pipeline_config = PipelineConfig.from_env()

    errors = s3_config.validate() + pipeline_config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    try:
        image_data = read_file(args.file)
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1

    service, _ = build_service(s3_config, pipeline_config, logger)
    try:
        photo = service.upload(
            image_data,
            os.path.basename(args.file),
            None,
            args.type,
            args.event_id,
        )
    except ValidationError as e:
        logger.error(f"Invalid image: {e.reason}")
        return 1
    except (UploadApiError, ValueError) as e:
        logger.error(f"Upload failed: {e}")
        return 1

    print(json.dumps(photo.to_dict(), indent=2))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='upload_api',
        description='Photo upload gateway with thumbnail generation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  serve:   python -m upload_api serve --port 4000
  inspect: python -m upload_api inspect photo.jpg
  process: python -m upload_api process photo.jpg --type events --event-id 42

Storage is configured through R2_ENDPOINT, R2_ACCESS_KEY, R2_SECRET_KEY,
R2_BUCKET and R2_PUBLIC_URL.
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    serve_parser = subparsers.add_parser('serve', help='Run the HTTP server')
    serve_parser.add_argument('--host', help='Override UPLOAD_API_HOST')
    serve_parser.add_argument('-p', '--port', type=int, help='Override UPLOAD_API_PORT')
    serve_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    inspect_parser = subparsers.add_parser('inspect', help='Validate an image and preview thumbnails')
    inspect_parser.add_argument('file', help='Image file')
    inspect_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    process_parser = subparsers.add_parser('process', help='Upload an image and its thumbnails')
    process_parser.add_argument('file', help='Image file')
    process_parser.add_argument('-t', '--type', choices=ASSET_TYPES, default='portfolio',
                                help='Asset type (default: portfolio)')
    process_parser.add_argument('-e', '--event-id', help='Event ID (required for --type events)')
    process_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'serve':
        return cmd_serve(parsed_args)
    elif parsed_args.command == 'inspect':
        return cmd_inspect(parsed_args)
    elif parsed_args.command == 'process':
        return cmd_process(parsed_args)

    return 1
