"""File-facing importer: decoding, empty-file and strict-mode policy."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from charset_normalizer import from_bytes

from clipkit.parsing.models import ParseWarning
from clipkit.parsing.options import ParseOptions
from clipkit.parsing.parser import ParseResult, parse_string

logger = logging.getLogger(__name__)

_FALLBACK_ENCODINGS = ("utf-8-sig", "cp1252")
_UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")


@dataclass(slots=True)
class ClippingsImportError(Exception):
    """Domain error raised when an export cannot be turned into records."""

    path: Path | None
    message: str
    code: str
    warnings: list[ParseWarning] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


class ClippingsImporter:
    """Read a clippings export from disk and parse it with one set of options."""

    def __init__(self, options: ParseOptions | None = None) -> None:
        self._options = options or ParseOptions()

    @property
    def options(self) -> ParseOptions:
        return self._options

    def import_path(self, path: str | Path) -> ParseResult:
        source = Path(path)
        try:
            raw = source.read_bytes()
        except OSError as exc:
            logger.error("Failed to read %s: %s", source, exc)
            raise ClippingsImportError(source, f"Could not read file: {exc}", "READ_FAILED") from exc

        text = self._decode(source, raw)
        return self._parse(text, source)

    def import_text(self, text: str) -> ParseResult:
        return self._parse(text, None)

    def _decode(self, path: Path, raw: bytes) -> str:
        encoding = self._detect_encoding(raw)
        if encoding is None:
            raise ClippingsImportError(path, "Could not detect file encoding", "DECODE_FAILED")
        logger.info("Decoding %s as %s", path, encoding)
        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ClippingsImportError(path, f"Could not decode file as {encoding}", "DECODE_FAILED") from exc

    def _detect_encoding(self, raw: bytes) -> str | None:
        if raw.startswith(b"\xef\xbb\xbf"):
            return "utf-8-sig"
        if raw.startswith(_UTF16_BOMS):
            return "utf-16"
        try:
            raw.decode("utf-8")
            return "utf-8"
        except UnicodeDecodeError:
            pass

        best = from_bytes(raw).best()
        if best and best.encoding:
            return best.encoding

        for fallback in _FALLBACK_ENCODINGS:
            try:
                raw.decode(fallback)
                return fallback
            except UnicodeDecodeError:
                continue
        return None

    def _parse(self, text: str, path: Path | None) -> ParseResult:
        if not text.strip():
            raise ClippingsImportError(path, "File is empty", "EMPTY_FILE")

        result = parse_string(text, self._options)
        if not result.records and result.warnings:
            raise ClippingsImportError(path, "No valid clippings found", "NO_CLIPPINGS", result.warnings)
        if self._options.strict and result.warnings:
            first = result.warnings[0]
            raise ClippingsImportError(
                path,
                f"Strict mode: {len(result.warnings)} warning(s), first: {first.message}",
                "STRICT_WARNINGS",
                result.warnings,
            )
        return result
