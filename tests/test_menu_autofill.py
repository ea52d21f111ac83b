import base64
import json

import httpx
import pytest

from conftest import error_messages
from kiosk_admin.schemas import ImageFile
from kiosk_admin.screens import MenusScreen
from kiosk_admin.services.backend import BackendError
from kiosk_admin.services.menu_autofill import (
    GENERATE_IMAGE_PATH,
    TRANSLATE_PATH,
    ImageGenerationError,
    MenuAutoFill,
    MenuDraft,
    TranslationError,
    decode_data_url,
)

pytestmark = pytest.mark.anyio

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png"
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()


@pytest.fixture
def happy_collaborators(collab_router):
    collab_router.add("POST", TRANSLATE_PATH, json={"translatedText": "Kimchi Fried Rice"})
    collab_router.add("POST", GENERATE_IMAGE_PATH, json={"imageUrl": PNG_DATA_URL})
    return collab_router


@pytest.fixture
def created_menu(backend_router):
    backend_router.add("POST", "/api/menu", json={"menuId": 1})
    return backend_router


# =============================================================================
# DATA URLS
# =============================================================================

def test_decode_data_url_keeps_declared_type():
    image = decode_data_url("data:image/jpeg;base64," + base64.b64encode(b"jpeg").decode())
    assert image.content == b"jpeg"
    assert image.content_type == "image/jpeg"
    assert image.filename == "menu-image.png"


def test_decode_data_url_defaults_to_png():
    image = decode_data_url("data:;base64," + base64.b64encode(b"raw").decode())
    assert image.content == b"raw"
    assert image.content_type == "image/png"


def test_decode_data_url_rejects_garbage():
    with pytest.raises(ImageGenerationError):
        decode_data_url("data:image/png;base64,@@not-base64@@")


# =============================================================================
# ENRICHMENT STEPS
# =============================================================================

async def test_existing_english_name_skips_translation(autofill, collab_router):
    name_en = await autofill.resolve_name_en("비빔밥", "Bibimbap")
    assert name_en == "Bibimbap"
    assert collab_router.calls == []


async def test_blank_english_name_is_translated(autofill, happy_collaborators):
    name_en = await autofill.resolve_name_en("김치볶음밥", "   ")
    assert name_en == "Kimchi Fried Rice"
    [call] = happy_collaborators.calls_to("POST", TRANSLATE_PATH)
    assert json.loads(call.content) == {"text": "김치볶음밥"}


async def test_translation_error_uses_body_message(autofill, collab_router):
    collab_router.add("POST", TRANSLATE_PATH, status=500, json={"message": "quota exceeded"})
    with pytest.raises(TranslationError, match="quota exceeded"):
        await autofill.resolve_name_en("김밥", "")


async def test_translation_error_without_message_uses_fallback(autofill, collab_router):
    collab_router.add("POST", TRANSLATE_PATH, status=502, text="bad gateway")
    with pytest.raises(TranslationError, match="Failed to translate the English menu name"):
        await autofill.resolve_name_en("김밥", "")


async def test_empty_translation_is_an_error(autofill, collab_router):
    collab_router.add("POST", TRANSLATE_PATH, json={"translatedText": "  "})
    with pytest.raises(TranslationError, match="Could not generate an English menu name"):
        await autofill.resolve_name_en("김밥", "")


async def test_chosen_file_skips_image_generation(autofill, collab_router):
    chosen = ImageFile("mine.jpg", b"jpeg", "image/jpeg")
    assert await autofill.resolve_image("비빔밥", chosen) is chosen
    assert collab_router.calls == []


async def test_missing_image_url_is_an_error(autofill, collab_router):
    collab_router.add("POST", GENERATE_IMAGE_PATH, json={})
    with pytest.raises(ImageGenerationError, match="Did not receive a generated image URL"):
        await autofill.resolve_image("김밥", None)


async def test_remote_image_url_is_downloaded(collab_router, backend):
    collab_router.add("POST", GENERATE_IMAGE_PATH, json={"imageUrl": "http://images.test/a.webp"})
    collab_router.add("GET", "/a.webp", content=b"webp-bytes", headers={"content-type": "image/webp"})
    client = httpx.AsyncClient(transport=collab_router.transport, base_url="http://console")

    image = await MenuAutoFill(client, backend).resolve_image("김밥", None)

    assert image.content == b"webp-bytes"
    assert image.content_type == "image/webp"


async def test_failed_download_is_an_error(collab_router, backend):
    collab_router.add("POST", GENERATE_IMAGE_PATH, json={"imageUrl": "http://images.test/gone.png"})
    collab_router.add("GET", "/gone.png", status=404)
    client = httpx.AsyncClient(transport=collab_router.transport, base_url="http://console")

    with pytest.raises(ImageGenerationError, match="Failed to load the generated image"):
        await MenuAutoFill(client, backend).resolve_image("김밥", None)


# =============================================================================
# SUBMISSION
# =============================================================================

async def test_scenario_translate_and_generate(autofill, happy_collaborators, created_menu):
    draft = MenuDraft(name="김치볶음밥", name_en="", price="8000", category_id="3")

    result = await autofill.submit(draft)

    assert len(happy_collaborators.calls_to("POST", TRANSLATE_PATH)) == 1
    [image_call] = happy_collaborators.calls_to("POST", GENERATE_IMAGE_PATH)
    assert json.loads(image_call.content) == {"prompt": "김치볶음밥"}

    [create] = created_menu.calls_to("POST", "/api/menu")
    assert create.headers["content-type"].startswith("multipart/form-data")
    assert b"Kimchi Fried Rice" in create.content
    assert "김치볶음밥".encode() in create.content
    assert b'name="categoryIds"' in create.content
    assert PNG_BYTES in create.content
    assert b"image/png" in create.content

    assert result.name_en == "Kimchi Fried Rice"
    assert result.image.content == PNG_BYTES


async def test_scenario_everything_provided(autofill, collab_router, created_menu):
    chosen = ImageFile("bibimbap.jpg", b"user-jpeg", "image/jpeg")
    draft = MenuDraft(name="Bibimbap", name_en="Bibimbap", price="9000", category_id="3", image=chosen)

    await autofill.submit(draft)

    assert collab_router.calls == []
    [create] = created_menu.calls_to("POST", "/api/menu")
    assert b"user-jpeg" in create.content
    assert b'filename="bibimbap.jpg"' in create.content


async def test_failed_translation_stops_the_pipeline(autofill, collab_router, created_menu):
    collab_router.add("POST", TRANSLATE_PATH, status=500, json={"message": "boom"})

    with pytest.raises(TranslationError):
        await autofill.submit(MenuDraft(name="김치볶음밥", price="8000", category_id="3"))

    assert collab_router.calls_to("POST", GENERATE_IMAGE_PATH) == []
    assert created_menu.calls_to("POST", "/api/menu") == []


async def test_empty_translation_stops_the_pipeline(autofill, collab_router, created_menu):
    collab_router.add("POST", TRANSLATE_PATH, json={"translatedText": ""})

    with pytest.raises(TranslationError):
        await autofill.submit(MenuDraft(name="김치볶음밥", price="8000", category_id="3"))

    assert collab_router.calls_to("POST", GENERATE_IMAGE_PATH) == []
    assert created_menu.calls == []


async def test_failed_image_generation_creates_nothing(autofill, collab_router, created_menu):
    collab_router.add("POST", TRANSLATE_PATH, json={"translatedText": "Gimbap"})
    collab_router.add("POST", GENERATE_IMAGE_PATH, status=500, json={"message": "Image generation failed"})

    with pytest.raises(ImageGenerationError, match="Image generation failed"):
        await autofill.submit(MenuDraft(name="김밥", price="4000", category_id="3"))

    assert created_menu.calls == []


async def test_backend_rejection_is_raised(autofill, happy_collaborators, backend_router):
    backend_router.add("POST", "/api/menu", status=400, json={"message": "duplicate menu"})

    with pytest.raises(BackendError, match="duplicate menu"):
        await autofill.submit(MenuDraft(name="김치볶음밥", price="8000", category_id="3"))


async def test_scenario_translation_500_on_the_screen(autofill, backend, collab_router, backend_router, toasts):
    collab_router.add("POST", TRANSLATE_PATH, status=500, json={"message": "Translation API error"})
    screen = MenusScreen(backend, toasts, autofill)
    screen.set_form(name="김치볶음밥", price="8000", category_id="3")

    assert await screen.add() is False

    assert collab_router.calls_to("POST", GENERATE_IMAGE_PATH) == []
    assert backend_router.calls_to("POST", "/api/menu") == []
    assert error_messages(toasts) == ["Translation API error"]
    assert screen.form.name == "김치볶음밥"
    assert screen.form.name_en == ""
    assert screen.submitting is False
