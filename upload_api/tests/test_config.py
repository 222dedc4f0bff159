"""Tests for configuration classes."""

from upload_api.config import PipelineConfig, S3Config, ServerConfig


class TestS3Config:
    """Tests for S3Config."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('R2_ENDPOINT', 'https://r2.example.com')
        monkeypatch.setenv('R2_ACCESS_KEY', 'ak')
        monkeypatch.setenv('R2_SECRET_KEY', 'sk')
        monkeypatch.setenv('R2_PUBLIC_URL', '"https://cdn.example.com/"')
        monkeypatch.delenv('R2_BUCKET', raising=False)

        config = S3Config.from_env()

        assert config.endpoint == 'https://r2.example.com'
        assert config.bucket == 'foto'
        assert config.public_url == 'https://cdn.example.com'
        assert config.is_configured
        assert config.validate() == []

    def test_validate_missing(self):
        errors = S3Config().validate()

        assert 'Missing R2_ENDPOINT' in errors
        assert 'Missing R2_ACCESS_KEY' in errors
        assert 'Missing R2_PUBLIC_URL' in errors
        assert not S3Config().is_configured


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def test_defaults(self):
        config = PipelineConfig()

        assert config.thumbnail_sizes == {'small': 400, 'medium': 800, 'large': 1200}
        assert config.encodings == ('jpeg', 'webp')
        assert config.jpeg_quality == 85
        assert 'image/heic' in config.allowed_mime_types
        assert config.validate() == []

    def test_size_classes_sorted_by_dimension(self):
        config = PipelineConfig(thumbnail_sizes={'large': 1200, 'small': 400})

        assert config.size_classes == ['small', 'large']

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv('UPLOAD_ALLOWED_MIME_TYPES', 'image/jpeg, image/png')
        monkeypatch.setenv('UPLOAD_PIPELINE_WORKERS', '4')

        config = PipelineConfig.from_env()

        assert config.allowed_mime_types == frozenset({'image/jpeg', 'image/png'})
        assert config.max_workers == 4

    def test_validate_quality_range(self):
        errors = PipelineConfig(jpeg_quality=101, webp_quality=-1).validate()

        assert 'jpeg_quality must be between 0 and 100' in errors
        assert 'webp_quality must be between 0 and 100' in errors

    def test_validate_encoding(self):
        assert 'Unsupported encoding: avif' in PipelineConfig(encodings=('avif',)).validate()


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('UPLOAD_API_PORT', '5000')
        monkeypatch.setenv('UPLOAD_API_KEY', 'secret')
        monkeypatch.setenv('LOG_LEVEL', 'debug')

        config = ServerConfig.from_env()

        assert config.port == 5000
        assert config.api_key == 'secret'
        assert config.log_level == 'DEBUG'
        assert config.max_file_size == 200 * 1024 * 1024

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv('UPLOAD_API_KEY', raising=False)

        assert 'Missing UPLOAD_API_KEY' in ServerConfig.from_env().validate()
