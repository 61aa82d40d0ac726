# app/services/upload_service.py
"""
Local storage for uploaded images.

All paths accepted and returned here are relative to the media root and use
forward slashes, so they can be stored in the database as-is and served
under /static.
"""

import logging
import uuid
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from PIL import Image, ImageOps, UnidentifiedImageError

from app.core.config import settings
from app.core.exceptions import UploadError

logger = logging.getLogger(__name__)


@dataclass
class UploadedImage:
    path: str
    filename: str
    width: int
    height: int
    size: int


class UploadService:
    def __init__(self, media_root: str | Path | None = None, max_upload_size: Optional[int] = None):
        self.media_root = Path(media_root or settings.media_root).resolve()
        self.max_upload_size = max_upload_size or settings.max_upload_size

    def _resolve(self, path: str) -> Optional[Path]:
        # Reject anything that escapes the media root ("../", absolute paths)
        candidate = (self.media_root / path).resolve()
        if candidate != self.media_root and self.media_root not in candidate.parents:
            return None
        return candidate

    def file_exists(self, path: str) -> bool:
        target = self._resolve(path)
        return target is not None and target.is_file()

    def delete_file(self, path: str) -> None:
        target = self._resolve(path)
        if target is None:
            logger.warning("Refusing to delete path outside media root: %s", path)
            return
        target.unlink(missing_ok=True)
        logger.info("Deleted upload %s", path)

    def upload_image(
        self,
        file: UploadFile,
        *,
        width: int,
        height: int,
        quality: int,
        directory: str,
    ) -> Optional[UploadedImage]:
        """
        Store ``file`` as a ``width`` x ``height`` JPEG under ``directory``.

        The image is cropped to the target aspect ratio around its centre
        before resizing. Returns None for an empty upload.
        """
        data = file.file.read(self.max_upload_size + 1)
        if not data:
            return None
        if len(data) > self.max_upload_size:
            raise UploadError(f"Image must be at most {self.max_upload_size} bytes")

        try:
            with Image.open(BytesIO(data)) as src:
                src.load()
                img = ImageOps.exif_transpose(src)
                img = ImageOps.fit(img, (width, height), method=Image.Resampling.LANCZOS)
                img = img.convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise UploadError("Uploaded file is not a valid image") from e

        out_dir = self._resolve(directory)
        if out_dir is None:
            raise UploadError(f"Invalid upload directory: {directory}")
        out_dir.mkdir(parents=True, exist_ok=True)

        filename = f"{uuid.uuid4().hex}.jpg"
        out_path = out_dir / filename
        img.save(out_path, format="JPEG", quality=quality, optimize=True)

        rel_path = out_path.relative_to(self.media_root).as_posix()
        logger.info("Stored image %s (%dx%d) from %s", rel_path, width, height, file.filename)

        return UploadedImage(
            path=rel_path,
            filename=filename,
            width=img.width,
            height=img.height,
            size=out_path.stat().st_size,
        )
