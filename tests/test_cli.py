import io
import json

from PIL import Image

from smart_prompt.cli import main


def _run(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


def test_text_command_with_mock(capsys):
    code, payload = _run(capsys, ["--mock", "text", "a cat on a rooftop"])
    assert code == 0
    assert payload["params"]["subject"] == "a cat on a rooftop"
    assert payload["params"]["camera"]["movement"] == "dolly_in"
    assert set(payload["outputs"]) == {"sora2", "veo3", "seedance2"}
    assert "note" not in payload


def test_text_command_without_key_degrades(capsys):
    code, payload = _run(capsys, ["--language", "en", "text", "a cat"])
    assert code == 0
    assert payload["note"] == "AI optimization unavailable"
    assert payload["params"]["subject"] == "a person"


def test_image_command_local(capsys):
    code, payload = _run(capsys, ["image", "a red fox in snow", "--local"])
    assert code == 0
    assert set(payload["prompts"]) == {"midjourney", "stableDiffusion", "dalle3", "ideogram", "nanoBanana"}
    assert "note" not in payload


def test_analyze_command(tmp_path, capsys):
    path = tmp_path / "shot.png"
    buffer = io.BytesIO()
    Image.new("RGB", (16, 9)).save(buffer, format="PNG")
    path.write_bytes(buffer.getvalue())

    code, payload = _run(capsys, ["--mock", "analyze", str(path)])
    assert code == 0
    assert payload["analysis"]["subjects"] == ["placeholder subject"]
    assert payload["prompts"]["dalle3"].startswith("placeholder subject, photorealistic")


def test_analyze_command_rejects_non_image(tmp_path, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    code, payload = _run(capsys, ["--mock", "analyze", str(path)])
    assert code == 2
    assert "error" in payload


def test_video_command(capsys):
    code, payload = _run(capsys, ["--mock", "video", "https://v.douyin.com/abc/"])
    assert code == 0
    assert payload["platform"] == {"id": "douyin", "name": "抖音"}

    code, payload = _run(capsys, ["--mock", "video", "https://example.com/clip"])
    assert code == 1
    assert payload["error"] == "Parse failed"


def test_video_command_without_parse_service(capsys):
    code, payload = _run(capsys, ["video", "https://v.douyin.com/abc/"])
    assert code == 2
    assert "PARSE_API_URL" in payload["error"]


def test_listing_commands(capsys):
    code, payload = _run(capsys, ["platforms"])
    assert code == 0
    assert len(payload["platforms"]) == 6

    code, payload = _run(capsys, ["models"])
    assert code == 0
    assert [m["id"] for m in payload["models"]][-1] == "nano-banana"
    midjourney = payload["models"][0]
    assert midjourney["maxLength"] == 4000
    assert "--ar" in midjourney["parameters"]


def test_empty_text_is_an_error(capsys):
    code, payload = _run(capsys, ["--mock", "text", "  "])
    assert code == 2
    assert payload["error"] == "Text is required"


def test_analyze_command_missing_file(tmp_path, capsys):
    code, payload = _run(capsys, ["--mock", "analyze", str(tmp_path / "missing.png")])
    assert code == 2
    assert "error" in payload

    code, payload = _run(capsys, ["--mock", "analyze", str(tmp_path)])
    assert code == 2
    assert "error" in payload


def test_analyze_command_without_vision_reports_note(tmp_path, capsys):
    path = tmp_path / "shot.png"
    buffer = io.BytesIO()
    Image.new("RGB", (16, 9)).save(buffer, format="PNG")
    path.write_bytes(buffer.getvalue())

    code, payload = _run(capsys, ["analyze", str(path)])
    assert code == 0
    assert payload["note"] == "AI optimization unavailable"
