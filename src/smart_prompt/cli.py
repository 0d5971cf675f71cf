"""Smart Prompt: command-line front end.

    smart-prompt text "a cat walking on a rooftop at dusk"
    smart-prompt image "a red fox in snow" --local
    smart-prompt analyze ./photo.jpg
    smart-prompt video https://v.douyin.com/xxxx/
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from .config import get_settings
from .image_analysis import ImageValidationError
from .image_renderer import image_model_catalogue
from .mock_provider import MockProvider
from .openai_provider import OpenAICompatibleProvider
from .parse_api_provider import ParseApiMetadataProvider
from .pipeline import (
    generate_from_image,
    generate_from_text,
    generate_from_video_url,
    generate_image_prompts,
)
from .provider_base import ProviderError
from .video_metadata import SUPPORTED_PLATFORMS

logger = logging.getLogger("smart_prompt")


def _emit(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _llm_provider(args: argparse.Namespace):
    if args.mock:
        return MockProvider()
    settings = get_settings()
    if not settings.use_ai or getattr(args, "local", False):
        return None
    try:
        return OpenAICompatibleProvider(settings)
    except ProviderError as e:
        logger.warning("%s; continuing without AI", e)
        return None


def cmd_text(args: argparse.Namespace) -> int:
    result = generate_from_text(args.text, _llm_provider(args), language=args.language)
    payload = {
        "success": True,
        "id": result.record.id,
        "params": result.params.to_dict(),
        "outputs": result.outputs.to_dict(),
    }
    if result.note:
        payload["note"] = result.note
    _emit(payload)
    return 0


def cmd_image(args: argparse.Namespace) -> int:
    result = generate_image_prompts(args.text, _llm_provider(args))
    payload = {"success": True, "text": args.text, "prompts": result.prompts.to_dict()}
    if result.note:
        payload["note"] = result.note
    _emit(payload)
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    try:
        data = Path(args.path).read_bytes()
        result = generate_from_image(data, _llm_provider(args))
    except (OSError, ImageValidationError) as e:
        _emit({"error": str(e)})
        return 2
    payload = {
        "success": True,
        "analysis": result.analysis.to_dict(),
        "prompts": result.prompts.to_dict(),
    }
    if result.note:
        payload["note"] = result.note
    _emit(payload)
    return 0


def cmd_video(args: argparse.Namespace) -> int:
    if args.mock:
        provider = MockProvider()
    else:
        try:
            provider = ParseApiMetadataProvider(get_settings())
        except ProviderError as e:
            _emit({"error": str(e)})
            return 2
    result = generate_from_video_url(args.url, provider, language=args.language)
    if result is None:
        _emit({"error": "Parse failed", "supportedPlatforms": SUPPORTED_PLATFORMS})
        return 1
    _emit({
        "success": True,
        "platform": {"id": result.platform.value, "name": result.platform_name},
        "video": result.metadata.to_dict(),
        "outputs": result.outputs.to_dict(),
    })
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smart-prompt", description="Multi-model video/image prompt generator")
    parser.add_argument("--mock", action="store_true", help="use the offline mock provider")
    parser.add_argument("--language", choices=["zh", "en"], default=None, help="language of the sora2 prompt")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_text = sub.add_parser("text", help="video prompts from a free-text description")
    p_text.add_argument("text")
    p_text.set_defaults(func=cmd_text)

    p_image = sub.add_parser("image", help="image prompts from a description")
    p_image.add_argument("text")
    p_image.add_argument("--local", action="store_true", help="skip the AI rewrite")
    p_image.set_defaults(func=cmd_image)

    p_analyze = sub.add_parser("analyze", help="image prompts from an image file")
    p_analyze.add_argument("path")
    p_analyze.set_defaults(func=cmd_analyze)

    p_video = sub.add_parser("video", help="video prompts from a social-video link")
    p_video.add_argument("url")
    p_video.set_defaults(func=cmd_video)

    p_platforms = sub.add_parser("platforms", help="list supported video platforms")
    p_platforms.set_defaults(func=lambda _args: _emit({"platforms": SUPPORTED_PLATFORMS}) or 0)

    p_models = sub.add_parser("models", help="list supported image models")
    p_models.set_defaults(func=lambda _args: _emit({"models": image_model_catalogue()}) or 0)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    for warning in settings.validate():
        logger.debug(warning)

    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        _emit({"error": str(e)})
        return 2


if __name__ == "__main__":
    sys.exit(main())
