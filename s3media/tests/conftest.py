"""
Pytest fixtures for s3media tests.
"""

import io

import pytest


@pytest.fixture
def s3_config():
    """Fixture providing S3 configuration."""
    from s3media.s3_config import S3Config
    
    return S3Config(
        bucket='test-bucket',
        region='us-east-1',
        access_key='test-access-key',
        secret_key='test-secret-key',
    )


@pytest.fixture
def image_sizes():
    """Fixture providing two size tiers, only the first requesting webp."""
    from s3media.size_spec import SizeSpec
    
    return [
        SizeSpec(name='small', resize_options={'width': 40, 'height': 40}, generate_webp=True),
        SizeSpec(name='medium', resize_options={'width': 80}),
    ]


@pytest.fixture
def upload_settings(image_sizes):
    """Fixture providing upload settings."""
    from s3media.size_spec import UploadSettings
    
    return UploadSettings(
        image_sizes=image_sizes,
        optimize_options={
            'jpeg': {'quality': 80},
            'png': {'optimize': True},
            'webp': {'quality': 75},
        },
    )


@pytest.fixture
def mock_store():
    """Fixture providing a mock object store."""
    from unittest.mock import MagicMock
    
    store = MagicMock()
    store.put.side_effect = lambda key, *args, **kwargs: key
    store.delete.return_value = None
    return store


@pytest.fixture
def provider(mock_store, upload_settings, logger):
    """Fixture providing a MediaProvider over the mock store and Pillow."""
    from s3media.provider import MediaProvider
    
    return MediaProvider(
        mock_store,
        upload_settings,
        base_url='https://cdn.example.com',
        logger=logger,
    )


def _image_bytes(fmt, mode='RGB', size=(100, 100), color='red', **save_kwargs):
    from PIL import Image
    
    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt, **save_kwargs)
    return buffer.getvalue()


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    return _image_bytes('JPEG')


@pytest.fixture
def sample_png_bytes():
    """Fixture providing sample PNG image bytes with transparency."""
    return _image_bytes('PNG', mode='RGBA', color=(255, 0, 0, 128))


@pytest.fixture
def sample_webp_bytes():
    """Fixture providing sample WEBP image bytes."""
    return _image_bytes('WEBP')


@pytest.fixture
def rotated_jpeg_bytes():
    """Fixture providing a 100x50 JPEG tagged with EXIF orientation 6 (90 deg CW)."""
    from PIL import Image
    
    exif = Image.Exif()
    exif[0x0112] = 6
    return _image_bytes('JPEG', size=(100, 50), exif=exif.tobytes())


@pytest.fixture
def png_file(sample_png_bytes):
    """Fixture providing a PNG FileDescriptor."""
    from s3media.file_descriptor import FileDescriptor
    
    return FileDescriptor(
        hash='photo_a1b2c3',
        ext='.png',
        mime='image/png',
        buffer=sample_png_bytes,
        name='photo.png',
    )


@pytest.fixture
def jpeg_file(sample_image_bytes):
    """Fixture providing a JPEG FileDescriptor."""
    from s3media.file_descriptor import FileDescriptor
    
    return FileDescriptor(
        hash='holiday_d4e5f6',
        ext='.jpg',
        mime='image/jpeg',
        buffer=sample_image_bytes,
        name='holiday.jpg',
    )


@pytest.fixture
def webp_file(sample_webp_bytes):
    """Fixture providing a WEBP FileDescriptor."""
    from s3media.file_descriptor import FileDescriptor
    
    return FileDescriptor(
        hash='banner_778899',
        ext='.webp',
        mime='image/webp',
        buffer=sample_webp_bytes,
        name='banner.webp',
    )


@pytest.fixture
def pdf_file():
    """Fixture providing a non-image FileDescriptor."""
    from s3media.file_descriptor import FileDescriptor
    
    return FileDescriptor(
        hash='report_0a0b0c',
        ext='.pdf',
        mime='application/pdf',
        buffer=b'%PDF-1.4 fake',
        name='report.pdf',
    )


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
