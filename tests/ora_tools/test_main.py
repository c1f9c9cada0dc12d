import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest
from PIL import Image

from ora_tools.__main__ import main

from .utils import body_eyes_entries

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "argv",
    [
        ["-h"],
        ["--version"],
        ["render", "-h"],
    ],
)
def test_main_exit(argv) -> None:
    with pytest.raises(SystemExit):
        main(argv)
        sys.exit()


def test_main_render(body_eyes_ora: str, tmp_path) -> None:
    output = tmp_path / "output.png"
    assert main(["--verbose", "render", body_eyes_ora, str(output)]) is None
    with Image.open(output) as image:
        assert image.size == (64, 64)
        assert image.mode == "RGBA"


def test_main_render_attributes(body_eyes_ora: str, tmp_path) -> None:
    output = tmp_path / "output.png"
    argv = ["render", body_eyes_ora, str(output), "--attributes", "Body_Green, Eyes_Blue"]
    assert main(argv) is None
    assert output.exists()


def test_main_render_metadata(body_eyes_ora: str, tmp_path) -> None:
    metadata = tmp_path / "metadata.json"
    metadata.write_text(
        json.dumps(
            {
                "attributes": [
                    {"trait_type": "Class", "value": "Body_Green"},
                    {"trait_type": "Eyes", "value": "Eyes_Blue"},
                ]
            }
        )
    )
    output = tmp_path / "output.png"
    argv = ["render", body_eyes_ora, str(output), "--metadata", str(metadata)]
    assert main(argv) is None
    assert output.exists()


def test_main_render_insufficient(body_eyes_ora: str, tmp_path) -> None:
    output = tmp_path / "output.png"
    argv = ["render", body_eyes_ora, str(output), "--attributes", "Eyes_Blue"]
    assert main(argv) == 1
    assert not output.exists()


def test_main_render_missing_file(tmp_path) -> None:
    argv = ["render", str(tmp_path / "missing.ora"), str(tmp_path / "out.png")]
    assert main(argv) == 1


def test_main_render_verbose_logs_output(
    body_eyes_ora: str, tmp_path, caplog: pytest.LogCaptureFixture
) -> None:
    output = tmp_path / "output.png"
    assert main(["--verbose", "render", body_eyes_ora, str(output)]) is None
    assert "Wrote %s" % output in caplog.messages


def test_main_render_missing_metadata(body_eyes_ora: str, tmp_path) -> None:
    output = tmp_path / "output.png"
    metadata = tmp_path / "missing.json"
    argv = ["render", body_eyes_ora, str(output), "--metadata", str(metadata)]
    assert main(argv) == 1
    assert not output.exists()


@pytest.mark.parametrize("content", ["{not json", "\"Eyes_Blue\""])
def test_main_render_malformed_metadata(
    body_eyes_ora: str, tmp_path, content: str
) -> None:
    output = tmp_path / "output.png"
    metadata = tmp_path / "metadata.json"
    metadata.write_text(content)
    argv = ["render", body_eyes_ora, str(output), "--metadata", str(metadata)]
    assert main(argv) == 1
    assert not output.exists()


def test_main_module_exit_status(tmp_path) -> None:
    src = str(Path(__file__).resolve().parents[2] / "src")
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        path for path in (src, env.get("PYTHONPATH")) if path
    )
    argv = ["render", str(tmp_path / "missing.ora"), str(tmp_path / "out.png")]
    result = subprocess.run(
        [sys.executable, "-m", "ora_tools"] + argv,
        capture_output=True,
        env=env,
    )
    assert result.returncode == 1


def test_main_show(body_eyes_ora: str) -> None:
    assert main(["show", body_eyes_ora]) is None


def test_main_random(body_eyes_ora: str, tmp_path) -> None:
    output = tmp_path / "random.png"
    assert main(["random", body_eyes_ora, str(output), "--seed", "7"]) is None
    assert output.read_bytes() in body_eyes_entries().values()
