"""
Menu Auto-Fill Pipeline

Before a new menu is uploaded, guarantee it has an English name and an
image, generating whichever the operator left empty:

    1. English name: kept when non-blank, otherwise POST {text} to
       /api/translate-menu and use `translatedText`.
    2. Image: kept when a file was chosen, otherwise POST {prompt} to
       /api/generate-menu-image and turn `imageUrl` (a URL or a data URL)
       into an uploadable file.
    3. Multipart create request to the backend.

The steps run strictly in order and the first failure stops the pipeline,
so a failed translation never costs an image generation and a failed
enrichment never creates a menu.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import unquote_to_bytes

import httpx

from kiosk_admin.schemas import ImageFile
from kiosk_admin.services.backend import BackendClient, error_message

logger = logging.getLogger(__name__)

TRANSLATE_PATH = "/api/translate-menu"
GENERATE_IMAGE_PATH = "/api/generate-menu-image"

DEFAULT_IMAGE_TYPE = "image/png"
GENERATED_FILENAME = "menu-image.png"


class AutoFillError(Exception):
    """An enrichment step failed; nothing was submitted."""


class TranslationError(AutoFillError):
    pass


class ImageGenerationError(AutoFillError):
    pass


@dataclass
class MenuDraft:
    """Values entered on the menu creation form."""
    name: str
    price: str
    category_id: str
    name_en: str = ""
    count: Optional[str] = None
    image: Optional[ImageFile] = None


@dataclass
class AutoFillResult:
    """What was actually submitted, plus the backend's answer."""
    name_en: str
    image: ImageFile
    created: Any = None


def json_field(response: httpx.Response, key: str) -> Any:
    """Value of `key` in a JSON object body, or None."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get(key) if isinstance(body, dict) else None


def decode_data_url(url: str) -> ImageFile:
    """
    Turn a `data:[<type>][;base64],<payload>` URL into an image file.

    The declared type is kept; `image/png` is used when none is declared.
    """
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:"):
        raise ImageGenerationError("Generated image could not be decoded")

    params = header[len("data:"):].split(";")
    content_type = params[0] or DEFAULT_IMAGE_TYPE

    try:
        if "base64" in params[1:]:
            content = base64.b64decode(payload, validate=True)
        else:
            content = unquote_to_bytes(payload)
    except (binascii.Error, ValueError) as e:
        raise ImageGenerationError("Generated image could not be decoded") from e

    return ImageFile(filename=GENERATED_FILENAME, content=content, content_type=content_type)


class MenuAutoFill:
    """
    Sequential fail-fast enrichment + submission of a new menu.

    Attributes:
        collaborators: Client for the translation/image endpoints
        backend: Backend API client used for the final create request
        fetcher: Client used to download a generated image URL
    """

    def __init__(
        self,
        collaborators: httpx.AsyncClient,
        backend: BackendClient,
        fetcher: Optional[httpx.AsyncClient] = None,
    ):
        self.collaborators = collaborators
        self.backend = backend
        self.fetcher = fetcher or collaborators

    async def resolve_name_en(self, name: str, current_en: str) -> str:
        """Return the English name, translating `name` when it is blank."""
        if current_en and current_en.strip():
            return current_en

        logger.info(f"Translating menu name '{name}'")
        try:
            response = await self.collaborators.post(TRANSLATE_PATH, json={"text": name})
        except httpx.HTTPError as e:
            logger.error(f"Translation request failed: {e}")
            raise TranslationError("Failed to translate the English menu name") from e

        if response.is_error:
            raise TranslationError(
                error_message(response, "Failed to translate the English menu name")
            )

        translated = str(json_field(response, "translatedText") or "").strip()
        if not translated:
            raise TranslationError("Could not generate an English menu name")

        return translated

    async def resolve_image(self, prompt: str, current: Optional[ImageFile]) -> ImageFile:
        """Return the chosen file, generating one from `prompt` when absent."""
        if current is not None:
            return current

        logger.info(f"Generating menu image for '{prompt}'")
        try:
            response = await self.collaborators.post(GENERATE_IMAGE_PATH, json={"prompt": prompt})
        except httpx.HTTPError as e:
            logger.error(f"Image generation request failed: {e}")
            raise ImageGenerationError("Failed to generate the menu image") from e

        if response.is_error:
            raise ImageGenerationError(
                error_message(response, "Failed to generate the menu image")
            )

        image_url = json_field(response, "imageUrl")
        if not image_url or not isinstance(image_url, str):
            raise ImageGenerationError("Did not receive a generated image URL")

        if image_url.startswith("data:"):
            return decode_data_url(image_url)
        return await self.fetch_image(image_url)

    async def fetch_image(self, url: str) -> ImageFile:
        """Download a generated image URL into a file."""
        try:
            response = await self.fetcher.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Generated image download failed: {e}")
            raise ImageGenerationError("Failed to load the generated image") from e

        if response.is_error:
            raise ImageGenerationError("Failed to load the generated image")

        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        return ImageFile(
            filename=GENERATED_FILENAME,
            content=response.content,
            content_type=content_type or DEFAULT_IMAGE_TYPE,
        )

    async def submit(self, draft: MenuDraft) -> AutoFillResult:
        """
        Resolve the English name, then the image, then create the menu.

        Raises:
            TranslationError: step 1 failed (no further calls made)
            ImageGenerationError: step 2 failed (no menu created)
            BackendError: the create request was rejected
        """
        name_en = await self.resolve_name_en(draft.name, draft.name_en)
        image = await self.resolve_image(draft.name, draft.image)

        created = await self.backend.create_menu(
            name=draft.name,
            name_en=name_en,
            price=draft.price,
            category_id=draft.category_id,
            image=image,
            count=draft.count or None,
        )
        logger.info(f"Menu '{draft.name}' ({name_en}) created")
        return AutoFillResult(name_en=name_en, image=image, created=created)
