import logging
import re
from collections import namedtuple
from types import MappingProxyType

logger = logging.getLogger("imagehack")

IMAGE = "img"
VIDEO = "video"
AUDIO = "audio"

MEDIA_TAGS = (IMAGE, VIDEO, AUDIO)

VIDEO_MIME_TYPES = MappingProxyType({
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "webm": "video/webm",
    "ogv": "video/ogg",
    "mkv": "video/x-matroska",
    "avi": "video/x-msvideo",
})

AUDIO_MIME_TYPES = MappingProxyType({
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "m4a": "audio/mp4",
})

IMAGE_EXTENSIONS = frozenset(["png", "jpg", "jpeg", "gif", "webp", "svg",
                              "avif", "bmp", "ico", "tif", "tiff"])

# the extension may be followed by a query or a fragment
EXTENSION_RE = re.compile(r"\.([a-zA-Z0-9]+)(?=[?#]|$)")

MediaType = namedtuple("MediaType", ["kind", "mime"])


def get_extension(src):
    if not src:
        return None
    match = EXTENSION_RE.search(src)
    if match is None:
        return None
    return match.group(1).lower()


def classify_media(src):
    """ Target kind and MIME type for a source path.
        Anything that is not a known video or audio extension stays an image """
    extension = get_extension(src)
    if extension in VIDEO_MIME_TYPES:
        return MediaType(VIDEO, VIDEO_MIME_TYPES[extension])
    if extension in AUDIO_MIME_TYPES:
        return MediaType(AUDIO, AUDIO_MIME_TYPES[extension])
    if extension not in IMAGE_EXTENSIONS:
        logger.debug("No media type for %r, leaving it an image", src)
    return MediaType(IMAGE, None)
