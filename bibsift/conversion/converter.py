"""PDF to minified text conversion.

Searchable text is scraped with ``pdftotext`` first. When that yields
nothing, or suspiciously little (scanned papers often carry a searchable
cover sheet only), the PDF's images are extracted with ``pdfimages`` and
run through ``tesseract``. All three tools are external programs.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from bibsift.core.diagnostics import DiagnosticsSink
from bibsift.core.exceptions import ConversionError
from bibsift.core.models import ProjectEntry
from bibsift.search.index import SHORT_TEXT_THRESHOLD
from bibsift.search.resolver import EntryResolver, EntrySpecifier
from bibsift.storage.project import Project

from .minify import minify

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_EXTENSIONS = (".jpg", ".tif", ".tiff", ".pbm", ".ppm", ".png")


def _run(command: Sequence[str], source: str | Path) -> bytes:
    try:
        completed = subprocess.run(list(command), capture_output=True, check=True)
    except FileNotFoundError as e:
        raise ConversionError(str(source), f"{command[0]} is not installed") from e
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
        details = f"{command[0]} exited with status {e.returncode}"
        if stderr:
            details += f": {stderr}"
        raise ConversionError(str(source), details) from e
    return completed.stdout


class Converter:
    """Convert a project's PDFs to minified text files."""

    def __init__(
        self,
        project: Project,
        diagnostics: DiagnosticsSink | None = None,
        ocr_languages: str = "eng",
    ) -> None:
        """Initialize converter.

        Args:
            project: Project whose entries are converted; saved afterwards
            diagnostics: Sink for progress and per-file failures
            ocr_languages: Tesseract language string, e.g. ``"eng+deu"``
        """
        self.project = project
        self.ocr_languages = ocr_languages
        self._log = diagnostics or logger

    def convert(
        self,
        specifiers: Iterable[EntrySpecifier] = (),
        force_ocr: bool = False,
        force: bool = False,
    ) -> list[ProjectEntry]:
        """Convert the selected entries and save the project.

        Args:
            specifiers: Entries to convert. When empty, every indexed entry
                is converted.
            force_ocr: Skip text scraping and go straight to OCR.
            force: Reconvert even if a text file already exists.

        Returns:
            The entries that were processed.

        Raises:
            ResolutionError: A specifier matches no entry; nothing is
                converted.
            ConversionError: The first conversion failure, raised after
                every selected entry was attempted and the project saved.
        """
        index = self.project.build_index(self._log)
        specifiers = list(specifiers)
        if specifiers:
            entries = EntryResolver(index, self._log).resolve(specifiers)
        else:
            entries = index.entries

        first_error: ConversionError | None = None
        for entry in entries:
            try:
                self.convert_entry(entry, force_ocr=force_ocr, force=force)
            except ConversionError as e:
                if first_error is None:
                    first_error = e

        self._log.info(f"Saving project file: {self.project.path}")
        self.project.save()

        if first_error is not None:
            raise first_error
        return entries

    def convert_entry(
        self, entry: ProjectEntry, force_ocr: bool = False, force: bool = False
    ) -> None:
        """Convert every PDF of ``entry``.

        ``entry.mini_files`` is only updated if all PDFs converted.
        """
        mini_files: list[str] = []
        first_error: ConversionError | None = None

        for pdf in entry.record.files:
            try:
                mini_files.append(str(self.convert_pdf(pdf, force_ocr, force)))
            except ConversionError as e:
                self._log.error(f"Failed to convert '{pdf}' - {e}")
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error

        entry.mini_files = mini_files
        self._log.debug(f"Updated entry's converted files: {mini_files}")

    def convert_pdf(
        self, pdf: str | Path, force_ocr: bool = False, overwrite: bool = False
    ) -> Path:
        """Convert a single PDF unless its text file already exists.

        Returns:
            Path of the minified text file.
        """
        target = self.project.mini_file_path(pdf)
        self._log.info(f"Converting {pdf}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionError(str(pdf), str(e)) from e

        if target.exists() and not overwrite:
            self._log.debug(
                f"{target} already exists and an overwrite wasn't requested."
            )
            return target

        text = self.convert_and_minify(pdf, force_ocr)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ConversionError(str(pdf), str(e)) from e
        return target

    def convert_and_minify(self, pdf: str | Path, force_ocr: bool = False) -> str:
        """Extract minified text, falling back to OCR for unsearchable PDFs."""
        if not force_ocr:
            text = minify(self.extract_text(pdf))
            if not text:
                self._log.debug(
                    "PDF did not contain searchable text. Using OCR conversion."
                )
            elif len(text) <= SHORT_TEXT_THRESHOLD:
                self._log.debug(
                    "Conversion yielded suspiciously low character count "
                    f"({len(text)}). Trying OCR instead..."
                )
            else:
                self._log.debug(f"Collected {len(text)} characters of searchable text.")
                return text

        return minify(self.ocr_text(pdf))

    def extract_text(self, pdf: str | Path) -> str:
        """Scrape searchable text with pdftotext."""
        command = ["pdftotext", "-q", "-nopgbrk", "-enc", "UTF-8", "-eol", "unix"]
        output = _run([*command, str(pdf), "-"], pdf)
        return output.decode("utf-8", errors="replace")

    def ocr_text(self, pdf: str | Path) -> str:
        """Extract the PDF's images and OCR each of them."""
        with tempfile.TemporaryDirectory(prefix="bibsift-convert-") as tmp_dir:
            _run(["pdfimages", str(pdf), str(Path(tmp_dir) / "img")], pdf)

            images = sorted(
                path
                for path in Path(tmp_dir).iterdir()
                if path.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS
            )

            parts = []
            for image in images:
                output = _run(
                    ["tesseract", str(image), "stdout", "-l", self.ocr_languages], pdf
                )
                parts.append(output.decode("utf-8", errors="replace"))
                self._log.debug(f"Extracted text from {image.name}")

        return " ".join(parts)
