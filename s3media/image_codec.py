"""
PillowCodec - Image decode/resize/rotate/encode backed by Pillow.
"""

import io
import logging
from typing import Any, Dict, Optional

from PIL import Image, ImageOps


class PillowCodec:
    """
    Image codec used by the VariantRenderer.
    
    Resize options follow the usual width/height/fit convention:
        cover    crop to fill the box exactly (default)
        contain  fit inside the box, padding with ``background``
        fill     stretch to the box, ignoring aspect ratio
        inside   fit inside the box, no padding
        outside  cover the box, no cropping
    Giving only one of width/height keeps the aspect ratio.
    ``withoutEnlargement`` leaves images smaller than the target untouched.
    """
    
    PIL_FORMATS = {
        'jpeg': 'JPEG',
        'png': 'PNG',
        'webp': 'WEBP',
        'avif': 'AVIF',
        'tiff': 'TIFF',
    }
    
    FITS = ('cover', 'contain', 'fill', 'inside', 'outside')
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
    
    def decode(self, data: bytes) -> Image.Image:
        """Decode image bytes."""
        img = Image.open(io.BytesIO(data))
        img.load()
        return img
    
    def auto_rotate(self, img: Image.Image) -> Image.Image:
        """Rotate according to the EXIF orientation tag, dropping the tag."""
        rotated = ImageOps.exif_transpose(img)
        return self._keep_format(img, rotated)
    
    def resize(self, img: Image.Image, options: Optional[Dict[str, Any]] = None) -> Image.Image:
        """Resize to the requested box. No width and no height means no resize."""
        options = options or {}
        width = options.get('width') or None
        height = options.get('height') or None
        fit = options.get('fit', 'cover')
        
        if fit not in self.FITS:
            raise ValueError(f"Unknown fit: {fit}")
        if width is None and height is None:
            return self._keep_format(img, img.copy())
        
        src_w, src_h = img.size
        if (
            options.get('withoutEnlargement')
            and (width is None or width >= src_w)
            and (height is None or height >= src_h)
        ):
            return self._keep_format(img, img.copy())
        
        if width is None or height is None:
            # Single dimension: scale proportionally
            ratio = (width / src_w) if width else (height / src_h)
            target = (max(1, round(src_w * ratio)), max(1, round(src_h * ratio)))
            resized = img.resize(target, Image.Resampling.LANCZOS)
        elif fit == 'cover':
            resized = ImageOps.fit(img, (width, height), Image.Resampling.LANCZOS)
        elif fit == 'contain':
            background = options.get('background', self._default_background(img))
            resized = ImageOps.pad(img, (width, height), Image.Resampling.LANCZOS, color=background)
        elif fit == 'fill':
            resized = img.resize((width, height), Image.Resampling.LANCZOS)
        elif fit == 'inside':
            resized = ImageOps.contain(img, (width, height), Image.Resampling.LANCZOS)
        else:
            ratio = max(width / src_w, height / src_h)
            target = (max(1, round(src_w * ratio)), max(1, round(src_h * ratio)))
            resized = img.resize(target, Image.Resampling.LANCZOS)
        
        return self._keep_format(img, resized)
    
    def encode(
        self,
        img: Image.Image,
        fmt: Optional[str],
        options: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """
        Encode an image.
        
        Args:
            img: Image to encode
            fmt: 'jpeg', 'png', 'webp', 'avif', 'tiff', or None to keep the
                format the image was decoded from
            options: Encoder keyword arguments, passed to Image.save verbatim
        
        Returns:
            Encoded bytes
        """
        pil_format = self.PIL_FORMATS.get(fmt) if fmt else img.format
        if not pil_format:
            raise ValueError(f"Unsupported output format: {fmt or 'unknown source format'}")
        
        img = self._convert_color_mode(img, pil_format)
        
        output = io.BytesIO()
        img.save(output, format=pil_format, **(options or {}))
        return output.getvalue()
    
    def _convert_color_mode(self, img: Image.Image, pil_format: str) -> Image.Image:
        """Convert image to a color mode the output format can store."""
        if pil_format == 'JPEG':
            if img.mode in ('RGBA', 'LA'):
                background = Image.new('RGB', img.size, (255, 255, 255))
                if img.mode == 'LA':
                    img = img.convert('RGBA')
                background.paste(img, mask=img.split()[-1])
                return background
            elif img.mode == 'P':
                img = img.convert('RGBA')
                background = Image.new('RGB', img.size, (255, 255, 255))
                background.paste(img, mask=img.split()[-1])
                return background
            elif img.mode not in ('RGB', 'L'):
                return img.convert('RGB')
        elif pil_format in ('WEBP', 'AVIF'):
            if img.mode not in ('RGB', 'RGBA'):
                return img.convert('RGBA' if 'A' in img.getbands() or img.mode == 'P' else 'RGB')
        elif pil_format == 'PNG' and img.mode == 'CMYK':
            return img.convert('RGB')
        return img
    
    @staticmethod
    def _default_background(img: Image.Image):
        if 'A' in img.getbands():
            return (0, 0, 0, 0)
        return (0, 0, 0)
    
    @staticmethod
    def _keep_format(src: Image.Image, dst: Image.Image) -> Image.Image:
        # Pillow drops .format on derived images; encode(fmt=None) needs it
        dst.format = src.format
        return dst
