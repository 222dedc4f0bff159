"""Tests for S3Client class."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from upload_api.exceptions import StorageWriteError
from upload_api.s3_client import S3Client


class TestS3Client:
    """Tests for S3Client class."""

    @pytest.fixture
    def client_with_mock(self, s3_config):
        """Fixture providing S3Client with mocked boto3."""
        mock_boto = MagicMock()
        with patch('upload_api.s3_client.boto3.client', return_value=mock_boto):
            client = S3Client(s3_config)
            # Store ref so tests can configure mock behavior
            client._test_mock = mock_boto
            yield client

    def test_client_configured_from_config(self, s3_config, mocker):
        boto_client = mocker.patch('upload_api.s3_client.boto3.client')

        S3Client(s3_config)

        kwargs = boto_client.call_args.kwargs
        assert boto_client.call_args.args == ('s3',)
        assert kwargs['endpoint_url'] == s3_config.endpoint
        assert kwargs['region_name'] == 'auto'

    def test_upload_object_returns_public_url(self, client_with_mock):
        url = client_with_mock.upload_object('portfolio/originals/a.jpg', b'data', 'image/jpeg')

        assert url == 'https://cdn.example.com/portfolio/originals/a.jpg'
        client_with_mock._test_mock.put_object.assert_called_once_with(
            Bucket='test-bucket',
            Key='portfolio/originals/a.jpg',
            Body=b'data',
            ContentType='image/jpeg',
        )

    def test_upload_object_client_error(self, client_with_mock):
        client_with_mock._test_mock.put_object.side_effect = ClientError(
            {'Error': {'Code': 'AccessDenied'}},
            'PutObject'
        )

        with pytest.raises(StorageWriteError) as exc_info:
            client_with_mock.upload_object('some/key.jpg', b'data', 'image/jpeg')

        assert exc_info.value.key == 'some/key.jpg'

    def test_upload_object_connection_error(self, client_with_mock):
        client_with_mock._test_mock.put_object.side_effect = EndpointConnectionError(
            endpoint_url='https://unreachable.example.com'
        )

        with pytest.raises(StorageWriteError):
            client_with_mock.upload_object('some/key.jpg', b'data')

    def test_delete_object(self, client_with_mock):
        client_with_mock.delete_object('some/key.jpg')

        client_with_mock._test_mock.delete_object.assert_called_once_with(
            Bucket='test-bucket', Key='some/key.jpg'
        )

    def test_delete_object_error(self, client_with_mock):
        client_with_mock._test_mock.delete_object.side_effect = ClientError(
            {'Error': {'Code': '500'}},
            'DeleteObject'
        )

        with pytest.raises(StorageWriteError):
            client_with_mock.delete_object('some/key.jpg')

    def test_check_bucket(self, client_with_mock):
        assert client_with_mock.check_bucket() is True

    def test_check_bucket_missing(self, client_with_mock):
        client_with_mock._test_mock.head_bucket.side_effect = ClientError(
            {'Error': {'Code': '404'}},
            'HeadBucket'
        )

        assert client_with_mock.check_bucket() is False

    def test_get_public_url(self, client_with_mock):
        assert client_with_mock.get_public_url('x/y.webp') == 'https://cdn.example.com/x/y.webp'
