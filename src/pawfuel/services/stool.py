"""Stool photo logging with a brightness heuristic."""

import base64
import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageStat, UnidentifiedImageError

from pawfuel.domain.stool import StoolLogEntry, StoolResult
from pawfuel.errors import InvalidInputError
from pawfuel.services.clock import Clock, local_today
from pawfuel.services.ids import new_id
from pawfuel.services.state import StateService

_logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 640
JPEG_QUALITY = 70
VET_BELOW = 70
WATCH_BELOW = 130


def compress_image(image_bytes: bytes, max_size: int = MAX_IMAGE_SIZE) -> Image.Image:
    """Decode an image and shrink it so the long side is at most max_size."""
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidInputError("Unreadable image") from exc
    if image.mode != "RGB":
        image = image.convert("RGB")
    image.thumbnail((max_size, max_size))
    return image


def classify_brightness(average: float) -> StoolResult:
    """Map mean pixel brightness to a result."""
    if average < VET_BELOW:
        return "Vet"
    if average < WATCH_BELOW:
        return "Watch"
    return "Healthy"


def analyse_stool(image_bytes: bytes) -> tuple[StoolResult, str]:
    """Return the classification and a JPEG data URL of the compressed photo."""
    image = compress_image(image_bytes)
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    # Channel means averaged, same as averaging (r + g + b) / 3 per pixel.
    average = sum(ImageStat.Stat(image).mean) / 3
    data_url = "data:image/jpeg;base64," + base64.b64encode(buffer.getvalue()).decode()
    return classify_brightness(average), data_url


@dataclass
class StoolService:
    """Stores stool log entries for the active dog."""

    state_service: StateService
    clock: Clock
    timezone: str = "UTC"

    def log_photo(
        self, image_bytes: bytes, keep_image: bool = True
    ) -> StoolLogEntry | None:
        """Analyse a photo and append a log entry; None when it can't be read."""
        state = self.state_service.state
        dog = state.active_dog()
        if dog is None:
            return None
        try:
            result, data_url = analyse_stool(image_bytes)
        except InvalidInputError as exc:
            _logger.warning("Stool photo rejected: %s", exc)
            return None
        entry = StoolLogEntry(
            id=new_id("stool_"),
            dog_id=dog.id,
            date=local_today(self.clock, self.timezone),
            result=result,
            image_data_url=data_url if keep_image else None,
        )
        state.stool_logs.append(entry)
        self.state_service.save()
        return entry

    def history(self, limit: int = 10) -> list[StoolLogEntry]:
        state = self.state_service.state
        return [s for s in state.stool_logs if s.dog_id == state.active_dog_id][-limit:]
