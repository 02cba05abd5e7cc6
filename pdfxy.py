#!/usr/bin/env python3
"""
pdfxy: Extracts paragraphs, lines and words from a PDF by XY-cut layout
analysis.

The PDF is parsed into positioned glyphs (GlyphExtractor), normalized
(degenerate glyphs removed, diacritics merged) and recursively cut along
empty lanes into paragraphs, lines and words (pdfxy_lib.pipeline).
"""

import argparse
import logging
import os
import sys
import time

# --- Dependency Imports ---
try:
    from rich.console import Console
    from rich.table import Table
except ImportError as e:
    print(f"Error: Missing required library. -> {e}")
    print("Please install all core dependencies with:")
    print("pip install pdfminer.six rich")
    sys.exit(1)

# --- Local Application Imports ---
from core.log_utils import ContextFilter, setup_logging
from pdfxy_lib.errors import ValidationError
from pdfxy_lib.extractor import GlyphExtractor
from pdfxy_lib.fontmetrics import FontMetrics
from pdfxy_lib.pipeline import process_document

log = logging.getLogger("pdfxy")


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """Shows default values while preserving newlines in help text."""

    pass


def parse_page_selection(pages_str: str) -> set | None:
    """Parses a page selection string (e.g., '1,3,5-7') into a set of integers."""
    if pages_str.lower() == "all":
        return None
    pages = set()
    try:
        for p in pages_str.split(","):
            part = p.strip()
            if "-" in part:
                s, e = map(int, part.split("-"))
                pages.update(range(s, e + 1))
            else:
                pages.add(int(part))
        return pages
    except ValueError:
        log.error("Invalid page selection format: %s. Defaulting to 'all'.", pages_str)
        return None


class Application:
    """Orchestrates the extraction workflow based on command-line arguments."""

    def __init__(self, args):
        self.args = args
        self.console = Console()

    def run(self):
        """Main entry point for the application logic."""
        setup_logging(
            project_name="pdfxy",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )
        log_filter = ContextFilter(os.path.basename(self.args.pdf_file))
        for handler in logging.getLogger().handlers:
            handler.addFilter(log_filter)

        start = time.monotonic()
        font_metrics = FontMetrics.load() if self.args.font_metrics else None
        extractor = GlyphExtractor(self.args.pdf_file, font_metrics=font_metrics)
        document = extractor.extract(parse_page_selection(self.args.pages))
        log.info("Parsed %d pages, %d glyphs.", len(document.pages), document.num_glyphs)

        try:
            result = process_document(document, strict=self.args.strict)
        except ValidationError as e:
            log.error("Validation failed (%s): %s", e.label, e)
            sys.exit(2)

        if self.args.output_file:
            with open(self.args.output_file, "w", encoding="utf-8") as f:
                f.write(result.get_text() + "\n")
            log.info("Saved extracted text to %s", self.args.output_file)
        elif self.args.show == "text":
            print(result.get_text())
        else:
            self._display_blocks(result, self.args.show)

        log.info("Done in %.2fs.", time.monotonic() - start)

    def _display_blocks(self, result, kind):
        """Renders the words, lines or paragraphs of every page as a table."""
        for page in result.pages:
            blocks = getattr(page, kind)
            table = Table(title=f"Page {page.page_num}: {len(blocks)} {kind}")
            table.add_column("#", justify="right")
            table.add_column("BBox")
            table.add_column("Font")
            table.add_column("Size", justify="right")
            table.add_column("Text", overflow="fold")
            for i, block in enumerate(blocks, start=1):
                stats = block.statistics
                bbox = ", ".join(f"{v:.1f}" for v in block.rect.as_tuple())
                size = f"{stats.font_size:.1f}" if stats.font_size is not None else "-"
                table.add_row(str(i), bbox, stats.font or "-", size, block.text)
            self.console.print(table)

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        examples = [
            "\nExamples:",
            "  python pdfxy.py document.pdf",
            "  python pdfxy.py document.pdf -p 1-3 --show lines",
            '  python pdfxy.py document.pdf -o "document.txt"',
            "  python pdfxy.py document.pdf -d xycut,tok --color-logs",
        ]
        parser = argparse.ArgumentParser(
            description="Extracts paragraphs, lines and words from a PDF.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
            epilog="\n".join(examples),
        )

        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument("pdf_file", help="Path to the input PDF file.")
        g_opts.add_argument(
            "-h",
            "--help",
            action="help",
            help="Show this help message and exit.",
        )

        g_proc = parser.add_argument_group("Processing Control")
        g_proc.add_argument(
            "-p",
            "--pages",
            default="all",
            metavar="PAGES",
            help="Pages to process (e.g., '1,3,5-7'). (default: %(default)s)",
        )
        g_proc.add_argument(
            "--no-font-metrics",
            action="store_false",
            dest="font_metrics",
            help="Keep pdfminer's glyph boxes for standard fonts. (default: tighten)",
        )
        g_proc.add_argument(
            "--strict",
            action="store_true",
            help="Abort on malformed glyphs instead of skipping them.",
        )

        g_out = parser.add_argument_group("Script Output & Actions")
        g_out.add_argument(
            "-s",
            "--show",
            default="text",
            choices=["text", "paragraphs", "lines", "words"],
            help="What to print to the terminal. (default: %(default)s)",
        )
        g_out.add_argument(
            "-o",
            "--output-file",
            default=None,
            metavar="FILE",
            help="Save the extracted paragraphs to a text file.",
        )
        g_out.add_argument(
            "--log-file",
            metavar="FILE",
            default=None,
            help="Redirect all logging output to a specified file.",
        )
        g_out.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output. (default: %(default)s)",
        )
        g_out.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress. (default: %(default)s)",
        )
        g_out.add_argument(
            "-d",
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging\n(all,extract,filter,diacritics,stats,xycut,tokenize,pipeline).",
        )

        return parser.parse_args(args)


def main():
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:])
        app = Application(args)
        app.run()
    except FileNotFoundError as e:
        log.critical(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        log.info("\nProcess interrupted by user. Exiting.")
        sys.exit(0)
    except Exception as e:
        log.critical("\nAn unexpected error occurred: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
