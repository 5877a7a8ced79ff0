"""Tests for VariantRenderer class."""

import io
import pytest
from unittest.mock import MagicMock

from PIL import Image

from s3media.exceptions import CodecError
from s3media.image_codec import PillowCodec
from s3media.path_namer import PathNamer
from s3media.size_spec import SizeSpec, UploadSettings
from s3media.variant_planner import VariantPlanner
from s3media.variant_renderer import VariantRenderer


class TestVariantRenderer:
    """Tests for VariantRenderer class."""
    
    @pytest.fixture
    def namer(self):
        """Fixture providing a PathNamer."""
        return PathNamer('https://cdn.example.com')
    
    @pytest.fixture
    def renderer(self, namer, upload_settings, logger):
        """Fixture providing a renderer over Pillow."""
        return VariantRenderer(PillowCodec(logger=logger), namer, upload_settings, logger=logger)
    
    def _render(self, renderer, namer, file, sizes):
        plan = VariantPlanner(namer).plan(file.hash, file.ext, sizes, mime=file.mime)
        return renderer.render(file, namer.origin_key(file.hash, file.ext), plan)
    
    def test_origin_job_first_and_unmodified(self, renderer, namer, png_file, image_sizes):
        """Test the first job is the untouched origin buffer."""
        result = self._render(renderer, namer, png_file, image_sizes)
        
        origin = result.jobs[0]
        assert origin.key == 'images/origin/photo_a1b2c3.png'
        assert origin.body == png_file.buffer
        assert origin.content_type == 'image/png'
    
    def test_job_order(self, renderer, namer, png_file, image_sizes):
        """Test jobs follow the plan order."""
        result = self._render(renderer, namer, png_file, image_sizes)
        
        assert [job.key for job in result.jobs] == [
            'images/origin/photo_a1b2c3.png',
            'images/small/photo_a1b2c3.png',
            'images/small/photo_a1b2c3.webp',
            'images/medium/photo_a1b2c3.png',
        ]
    
    def test_formats_metadata(self, renderer, namer, png_file, image_sizes):
        """Test per-variant metadata."""
        result = self._render(renderer, namer, png_file, image_sizes)
        
        webp = result.formats['small']['webp']
        assert webp.ext == '.webp'
        assert webp.mime == 'image/webp'
        assert webp.url == 'https://cdn.example.com/images/small/photo_a1b2c3.webp'
        assert webp.path == 'images/small/photo_a1b2c3.webp'
        assert webp.width == 40
        assert webp.height == 40
        assert webp.name == 'photo.png'
        assert webp.size == pytest.approx(len(result.jobs[2].body) / 1024)
        
        medium = result.formats['medium']['origin']
        assert medium.width == 80
        assert medium.height is None
        assert set(result.formats['medium']) == {'origin'}
    
    def test_variants_are_encoded(self, renderer, namer, png_file, image_sizes):
        """Test variant bytes decode to the planned format and size."""
        result = self._render(renderer, namer, png_file, image_sizes)
        
        small = Image.open(io.BytesIO(result.jobs[1].body))
        assert small.format == 'PNG'
        assert small.size == (40, 40)
        assert Image.open(io.BytesIO(result.jobs[2].body)).format == 'WEBP'
    
    def test_each_variant_decodes_original(self, namer, upload_settings, png_file, image_sizes, logger):
        """Test every variant is rendered from the original bytes."""
        codec = MagicMock()
        codec.encode.return_value = b'encoded'
        renderer = VariantRenderer(codec, namer, upload_settings, logger=logger)
        
        self._render(renderer, namer, png_file, image_sizes)
        
        assert codec.decode.call_count == 3
        assert all(c.args[0] == png_file.buffer for c in codec.decode.call_args_list)
        assert codec.auto_rotate.call_count == 3
    
    def test_optimize_options_passed_verbatim(self, namer, upload_settings, png_file, image_sizes, logger):
        """Test encoder options come from settings by format."""
        codec = MagicMock()
        codec.encode.return_value = b'encoded'
        renderer = VariantRenderer(codec, namer, upload_settings, logger=logger)
        
        self._render(renderer, namer, png_file, image_sizes)
        
        fmts_and_options = [(c.args[1], c.args[2]) for c in codec.encode.call_args_list]
        assert fmts_and_options == [
            ('png', {'optimize': True}),
            ('webp', {'quality': 75}),
            ('png', {'optimize': True}),
        ]
    
    def test_codec_failure_raises(self, namer, upload_settings, png_file, logger):
        """Test a codec error aborts the whole render."""
        codec = MagicMock()
        codec.encode.side_effect = [b'one', b'two', OSError('broken encoder')]
        sizes = [SizeSpec(name=f"s{i}", resize_options={'width': 10 * i}) for i in range(1, 6)]
        renderer = VariantRenderer(codec, namer, UploadSettings(image_sizes=sizes), logger=logger)
        
        with pytest.raises(CodecError) as exc_info:
            self._render(renderer, namer, png_file, sizes)
        
        assert exc_info.value.size_name == 's3'
        assert exc_info.value.file_hash == 'photo_a1b2c3'
        assert isinstance(exc_info.value.__cause__, OSError)
    
    def test_events_emitted(self, namer, upload_settings, png_file, image_sizes, logger):
        """Test a variant_generated event per variant."""
        events = MagicMock()
        renderer = VariantRenderer(PillowCodec(), namer, upload_settings, events=events, logger=logger)
        
        self._render(renderer, namer, png_file, image_sizes)
        
        keys = [c.args[0] for c in events.on_variant_generated.call_args_list]
        assert keys == [
            'images/small/photo_a1b2c3.png',
            'images/small/photo_a1b2c3.webp',
            'images/medium/photo_a1b2c3.png',
        ]
