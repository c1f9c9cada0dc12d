import io
import logging
import zipfile
from typing import Mapping, Optional, Sequence

from PIL import Image

logging.basicConfig(level=logging.DEBUG)

BODY_COLOR = (200, 50, 50, 255)
EYES_COLOR = (20, 40, 240, 128)


def make_png(
    size: tuple[int, int], color: tuple[int, int, int, int] = (0, 0, 0, 255)
) -> bytes:
    with io.BytesIO() as f:
        Image.new("RGBA", size, color).save(f, format="PNG")
        return f.getvalue()


def layer_xml(
    src: str,
    name: str,
    visible: bool = True,
    x: int = 0,
    y: int = 0,
) -> str:
    return '<layer src="%s" name="%s" visibility="%s" x="%d" y="%d"/>' % (
        src,
        name,
        "visible" if visible else "hidden",
        x,
        y,
    )


def stack_xml(name: str, *children: str) -> str:
    return '<stack name="%s">%s</stack>' % (name, "".join(children))


def manifest_xml(width: int, height: int, *stacks: str, root: str = "Root") -> bytes:
    """Manifest with a top-level stack holding a single root stack."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<image w="%d" h="%d"><stack>%s</stack></image>'
        % (width, height, stack_xml(root, *stacks))
    ).encode("utf-8")


def make_ora(
    manifest: Optional[bytes], entries: Optional[Mapping[str, bytes]] = None
) -> bytes:
    with io.BytesIO() as f:
        with zipfile.ZipFile(f, "w") as z:
            z.writestr("mimetype", "image/openraster")
            if manifest is not None:
                z.writestr("stack.xml", manifest)
            for name, data in (entries or {}).items():
                z.writestr(name, data)
        return f.getvalue()


def body_eyes_manifest(order: Sequence[str] = ("Body", "Eyes")) -> bytes:
    stacks = {
        "Body": stack_xml("Body", layer_xml("data/body.png", "Body_Green")),
        "Eyes": stack_xml(
            "Eyes", layer_xml("data/eyes.png", "Eyes_Blue", x=10, y=10)
        ),
    }
    return manifest_xml(64, 64, *[stacks[name] for name in order])


def body_eyes_entries() -> dict[str, bytes]:
    return {
        "data/body.png": make_png((64, 64), BODY_COLOR),
        "data/eyes.png": make_png((20, 20), EYES_COLOR),
    }
