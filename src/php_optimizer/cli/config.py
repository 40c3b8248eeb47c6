from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from php_optimizer.adapters.images.shell_image_optimizer import ImageToolchain
from php_optimizer.domain.entities import PipelineConfig, RunRequest
from php_optimizer.domain.errors import ConfigurationError
from php_optimizer.stages.quality_pipeline import QualityTools


@dataclass(slots=True)
class ToolchainConfig:
    php_executable: str
    quality_tools: QualityTools
    prettier_command: tuple[str, ...]
    image_toolchain: ImageToolchain
    timeout_seconds: float | None


@dataclass(slots=True)
class AppConfig:
    log_level: str
    log_format: str
    dry_run: bool
    request: RunRequest | None
    toolchain: ToolchainConfig


def load_config(args, env: Mapping[str, str]) -> AppConfig:
    log_level = _normalize_empty(args.log_level) or _normalize_empty(env.get("LOG_LEVEL")) or "INFO"
    log_format = _normalize_empty(args.log_format) or _normalize_empty(env.get("LOG_FORMAT")) or "text"
    if log_format.lower() not in {"json", "text"}:
        raise ConfigurationError("LOG_FORMAT/--log-format must be one of: json, text")

    # Without --directory the run request comes from interactive prompts.
    request: RunRequest | None = None
    directory = _normalize_empty(args.directory)
    if directory:
        request = RunRequest(
            root=Path(directory).expanduser(),
            config=PipelineConfig(
                format_code=args.format_code,
                analyze_code=args.analyze_code,
                check_security=args.check_security,
                format_scripts=args.format_scripts,
            ),
        )

    return AppConfig(
        log_level=log_level,
        log_format=log_format.lower(),
        dry_run=args.dry_run,
        request=request,
        toolchain=load_toolchain(env),
    )


def load_toolchain(env: Mapping[str, str]) -> ToolchainConfig:
    prettier_command = tuple((_normalize_empty(env.get("PRETTIER_COMMAND")) or "npx prettier").split())

    raw_timeout = _normalize_empty(env.get("TOOL_TIMEOUT_SECONDS"))
    timeout_seconds: float | None = None
    if raw_timeout is not None:
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError as error:
            raise ConfigurationError("TOOL_TIMEOUT_SECONDS must be a number") from error
        if timeout_seconds <= 0:
            raise ConfigurationError("TOOL_TIMEOUT_SECONDS must be greater than 0")

    return ToolchainConfig(
        php_executable=_executable(env, "PHP_BINARY", "php"),
        quality_tools=QualityTools(
            style_fixer=_executable(env, "PHP_CS_FIXER_BINARY", "php-cs-fixer"),
            auto_fixer=_executable(env, "PHPCBF_BINARY", "phpcbf"),
            analyzer=_executable(env, "PHPCS_BINARY", "phpcs"),
            security_analyzer=_executable(env, "PHPSTAN_BINARY", "phpstan"),
        ),
        prettier_command=prettier_command,
        image_toolchain=ImageToolchain(
            jpegoptim=_executable(env, "JPEGOPTIM_BINARY", "jpegoptim"),
            pngquant=_executable(env, "PNGQUANT_BINARY", "pngquant"),
            gifsicle=_executable(env, "GIFSICLE_BINARY", "gifsicle"),
            svgo=_executable(env, "SVGO_BINARY", "svgo"),
            cwebp=_executable(env, "CWEBP_BINARY", "cwebp"),
            convert_to_webp=parse_bool(env.get("IMAGE_WEBP_CONVERSION", "true"), "IMAGE_WEBP_CONVERSION"),
        ),
        timeout_seconds=timeout_seconds,
    )


def parse_bool(value: str, name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigurationError(f"{name} must be a boolean (true/false)")


def _executable(env: Mapping[str, str], name: str, default: str) -> str:
    return _normalize_empty(env.get(name)) or default


def _normalize_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None
