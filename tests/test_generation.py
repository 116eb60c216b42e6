# FILE: tests/test_generation.py
"""Tests for prompt assembly and the generate -> sanitize -> repair flow"""
import asyncio

import pytest

from snapcode.errors import ModelServiceError
from snapcode.models.generation import GenerateCodeRequest, ImageRecord, InlineImage, RemoteImage
from snapcode.providers.gemini import normalize_model_name
from snapcode.services.generation import (
    build_prompt_parts, describe_image, generate_code, parse_image_reference
)
from snapcode.services.prompts import DESCRIBE_PROMPT, REPAIR_PROMPT, get_coding_prompt


def test_parse_data_url():
    """Data URLs become inline images"""
    image = parse_image_reference("data:image/png;base64,iVBORw0KGgo=")
    assert image == InlineImage(data="iVBORw0KGgo=", mime_type="image/png")


def test_parse_remote_url():
    """HTTP(S) URLs become remote references without a media type"""
    assert parse_image_reference("HTTPS://example.com/a.png") == RemoteImage(uri="HTTPS://example.com/a.png")


@pytest.mark.parametrize("url", [None, "", "ftp://example.com/a.png", "data:image/png,rawdata"])
def test_parse_unsupported(url):
    """Anything else carries no image"""
    assert parse_image_reference(url) is None


@pytest.mark.parametrize("name,expected", [
    ("gemini-2.5-pro", "models/gemini-2.5-pro"),
    ("models/gemini-2.5-pro", "models/gemini-2.5-pro"),
    ("", "models/gemini-2.5-flash"),
    (None, "models/gemini-2.5-flash"),
])
def test_normalize_model_name(name, expected):
    assert normalize_model_name(name) == expected


def test_prompt_with_image():
    """System, user and image parts are sent separately"""
    request = GenerateCodeRequest(imageUrl="data:image/jpeg;base64,AAAA")
    parts = build_prompt_parts(request)

    assert len(parts) == 3
    assert parts[0] == get_coding_prompt(False)
    assert "Analyze the provided image" in parts[1]
    assert parts[2] == InlineImage(data="AAAA", mime_type="image/jpeg")


def test_prompt_without_image_uses_description():
    """Without an image the description stands in, in a single text part"""
    request = GenerateCodeRequest(imageDescription="A pricing table with three tiers")
    parts = build_prompt_parts(request)

    assert len(parts) == 1
    assert "Image description: A pricing table with three tiers" in parts[0]


def test_prompt_without_anything():
    """No image and no description -> 'none'"""
    parts = build_prompt_parts(GenerateCodeRequest())
    assert parts[0].endswith("Image description: none")


def test_stored_description_wins():
    """The server-side description takes precedence over the client one"""
    request = GenerateCodeRequest(
        imageUrl="https://example.com/shot.png",
        imageDescription="client copy"
    )
    record = ImageRecord(data_url="data:image/png;base64,AAAA", description="stored copy")
    parts = build_prompt_parts(request, record)

    assert "Image description: stored copy" in parts[1]
    assert "client copy" not in parts[1]
    assert parts[2] == RemoteImage(uri="https://example.com/shot.png")


def test_stored_image_used_when_url_missing():
    """The stored data URL is sent when the request has no imageUrl"""
    record = ImageRecord(data_url="data:image/webp;base64,BBBB")
    parts = build_prompt_parts(GenerateCodeRequest(imageId="abc"), record)

    assert parts[2] == InlineImage(data="BBBB", mime_type="image/webp")


def test_component_library_prompt():
    """The shadcn flag adds the component docs"""
    assert "<name>\nButton\n</name>" in get_coding_prompt(True)
    assert "<name>\nButton\n</name>" not in get_coding_prompt(False)
    assert "NO OTHER LIBRARIES" in get_coding_prompt(False)


def test_generate_clean_output(registry, fake_provider, image_store, test_settings, valid_component):
    """Clean output needs a single model call"""
    fake_provider.responses = [valid_component]
    request = GenerateCodeRequest(model="gemini-2.5-pro", imageUrl="data:image/png;base64,AAAA", shadcn=True)

    result = asyncio.run(generate_code(request, registry, image_store, test_settings))

    assert result == valid_component
    assert len(fake_provider.calls) == 1
    assert fake_provider.calls[0]["model"] == "models/gemini-2.5-pro"


def test_generate_sanitizes_then_repairs(registry, fake_provider, image_store, test_settings):
    """Broken output triggers exactly one repair with the sanitized text"""
    fake_provider.responses = [
        "export default function A() {\x00\n  return <p>{`hi</p>\n}\n",
        "export default function A() {\n  return <p>{`hi`}</p>\n}\n",
    ]

    result = asyncio.run(generate_code(GenerateCodeRequest(), registry, image_store, test_settings))

    assert result == "export default function A() {\n  return <p>{`hi`}</p>\n}\n"
    assert len(fake_provider.calls) == 2
    repair_call = fake_provider.calls[1]
    assert repair_call["model"] == "models/gemini-2.5-flash"
    assert repair_call["parts"][0] == REPAIR_PROMPT
    assert "\x00" not in repair_call["parts"][1]


def test_generate_repair_disabled(registry, fake_provider, image_store):
    """REPAIR_ATTEMPTS=0 keeps the sanitized first answer"""
    from snapcode.config import Settings

    settings = Settings(GEMINI_API_KEY="k", REPAIR_ATTEMPTS=0, _env_file=None)
    fake_provider.responses = ["const s = `hello"]

    result = asyncio.run(generate_code(GenerateCodeRequest(), registry, image_store, settings))

    assert result == "const s = `hello"
    assert len(fake_provider.calls) == 1


def test_generate_propagates_model_error(registry, fake_provider, image_store, test_settings):
    """First-call failures surface to the caller"""
    fake_provider.error = ModelServiceError("unavailable")

    with pytest.raises(ModelServiceError):
        asyncio.run(generate_code(GenerateCodeRequest(), registry, image_store, test_settings))


def test_generate_looks_up_stored_record(registry, fake_provider, image_store, test_settings):
    """imageId pulls the stored description into the prompt"""
    image_id = image_store.put(ImageRecord(data_url="data:image/png;base64,AAAA", description="Dark dashboard"))
    fake_provider.responses = ["const a = 1;"]

    asyncio.run(generate_code(GenerateCodeRequest(imageId=image_id), registry, image_store, test_settings))

    parts = fake_provider.calls[0]["parts"]
    assert "Image description: Dark dashboard" in parts[1]
    assert parts[2] == InlineImage(data="AAAA", mime_type="image/png")


def test_describe_image(registry, fake_provider):
    """Upload description is stripped text, None on failure"""
    image = InlineImage(data="AAAA", mime_type="image/png")
    fake_provider.responses = ["  A login form with two inputs.  "]

    assert asyncio.run(describe_image(registry, image, "gemini-2.5-flash")) == "A login form with two inputs."
    assert fake_provider.calls[0]["parts"] == [DESCRIBE_PROMPT, image]

    fake_provider.error = ModelServiceError("down")
    assert asyncio.run(describe_image(registry, image, "gemini-2.5-flash")) is None
