from __future__ import annotations
"""Image-optimization engine built from per-format command-line optimizers."""

from dataclasses import dataclass
import logging
from pathlib import Path

from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ImageOptimizerPort, ToolInvokerPort


JPEG_SUFFIXES = frozenset({".jpg", ".jpeg"})
PNG_SUFFIXES = frozenset({".png"})
GIF_SUFFIXES = frozenset({".gif"})
SVG_SUFFIXES = frozenset({".svg"})

# pngquant --skip-if-larger: 98 = result larger than input, 99 = quality too low.
PNGQUANT_NOT_SMALLER_CODES = frozenset({98, 99})


@dataclass(frozen=True, slots=True)
class ImageToolchain:
    """Executables used by `ShellImageOptimizer`."""

    jpegoptim: str = "jpegoptim"
    pngquant: str = "pngquant"
    gifsicle: str = "gifsicle"
    svgo: str = "svgo"
    cwebp: str = "cwebp"
    jpeg_max_quality: int = 75
    webp_quality: int = 75
    convert_to_webp: bool = True


class ShellImageOptimizer(ImageOptimizerPort):
    """Run the matching optimizers for one image, writing next to the original.

    Lossy JPEG compression, lossy PNG quantization, GIF optimization and SVG
    minification rewrite the file in place. JPEG and PNG inputs are also
    converted to a sibling `.webp` when `convert_to_webp` is enabled.
    """

    def __init__(self, invoker: ToolInvokerPort, toolchain: ImageToolchain | None = None) -> None:
        self._invoker = invoker
        self._toolchain = toolchain or ImageToolchain()
        self._logger = logging.getLogger(__name__)

    @property
    def dry_run(self) -> bool:
        return self._invoker.dry_run

    def optimize(self, image_path: Path) -> list[Path]:
        suffix = image_path.suffix.lower()
        cwd = image_path.parent
        tools = self._toolchain
        written: list[Path] = []

        if suffix in JPEG_SUFFIXES:
            self._invoker.invoke(
                [tools.jpegoptim, "--strip-all", f"--max={tools.jpeg_max_quality}", str(image_path)],
                cwd,
            )
            written.append(image_path)
        elif suffix in PNG_SUFFIXES:
            if self._quantize_png(image_path):
                written.append(image_path)
        elif suffix in GIF_SUFFIXES:
            self._invoker.invoke([tools.gifsicle, "--batch", "-O3", str(image_path)], cwd)
            written.append(image_path)
        elif suffix in SVG_SUFFIXES:
            self._invoker.invoke([tools.svgo, str(image_path)], cwd)
            written.append(image_path)

        if tools.convert_to_webp and suffix in JPEG_SUFFIXES | PNG_SUFFIXES:
            webp_path = image_path.with_suffix(".webp")
            self._invoker.invoke(
                [tools.cwebp, "-quiet", "-q", str(tools.webp_quality), str(image_path), "-o", str(webp_path)],
                cwd,
            )
            written.append(webp_path)

        return written

    def _quantize_png(self, image_path: Path) -> bool:
        tools = self._toolchain
        try:
            self._invoker.invoke(
                [tools.pngquant, "--force", "--skip-if-larger", "--output", str(image_path), str(image_path)],
                image_path.parent,
            )
        except ToolInvocationError as error:
            if error.return_code in PNGQUANT_NOT_SMALLER_CODES:
                self._logger.debug(
                    "pngquant kept original",
                    extra={"event": "image.png.not_smaller", "file": str(image_path), "return_code": error.return_code},
                )
                return False
            raise
        return True
