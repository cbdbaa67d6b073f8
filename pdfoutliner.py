#!/usr/bin/env python3
"""
pdfoutliner: Adds a navigable outline (bookmarks) to PDF files.

The outline is reconstructed from the visual layout of the text: styles that
are consistently aligned to a text column, rare enough, and large enough are
treated as headings, and their order of appearance defines the levels. An
outline can also be exported to, or imported from, a tab-indented text file.
"""

import argparse
import logging
import os
import sys

# --- Local Application Imports ---
from core.log_utils import setup_logging
from outliner_lib.api import extract_outline
from outliner_lib.config import ConfigService
from outliner_lib.errors import OutlineError
from outliner_lib.models import OutlineItem
from outliner_lib.outline_io import outline_to_str, read_outline_file, write_outline_file
from outliner_lib.params import Params
from outliner_lib.pdf_outline import get_outline, open_document, save_document, set_outline

# --- LOGGING SETUP ---
log = logging.getLogger("outliner.main")

MARK_TEXT = "Added by PDFoutliner"


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


class Application:
    """Orchestrates the outline workflow based on command-line arguments."""

    FROMTXT_DEFAULT_SENTINEL = "__DEFAULT_TXT__"

    def __init__(self, args):
        self.args = args
        self.base_path = args.input_file[:-4]
        self.config = ConfigService(args.config)

    def run(self):
        """Main entry point for the application logic. Returns an exit code."""
        setup_logging(
            project_name="outliner",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )
        if not self.args.input_file.lower().endswith(".pdf"):
            log.error("Input file must have .pdf extension")
            return 1
        if not os.path.exists(self.args.input_file):
            log.critical("PDF file not found: %s", self.args.input_file)
            return 1

        try:
            params = self.config.get_params(Params.parse_overrides(self.args.params))
            doc = open_document(self.args.input_file)
            existing = get_outline(doc)
            outline = self._get_outline(existing, params)

            if self.args.mark or self.config.get_mark():
                outline.insert(0, OutlineItem(1, MARK_TEXT, 1))

            if self.args.output == "txt":
                out_path = self.args.output_file or f"{self.base_path}_outline.txt"
                if not out_path.endswith(".txt"):
                    out_path = f"{out_path}.txt"
                write_outline_file(out_path, outline)
                origin = "Existing" if existing else "Extracted"
                print(f"{origin} outline saved to {out_path}")
            elif self.args.output == "stdout":
                print(outline_to_str(outline))
            elif self.args.output == "pdf":
                if existing and not self.args.ignore_existing:
                    print("Nothing to do")
                    return 0
                fold_level = self.args.fold_level
                if fold_level is None:
                    fold_level = self.config.get_fold_level()
                set_outline(doc, outline, fold_level)
                out_path = self.args.output_file or f"{self.base_path}_outlined.pdf"
                save_document(doc, out_path)
                print(f"Saved to {out_path}")
        except (OutlineError, ValueError, FileNotFoundError) as e:
            log.critical("%s", e)
            return 1
        return 0

    def _get_outline(self, existing, params):
        """Chooses between the existing, imported and extracted outline."""
        if existing and not self.args.ignore_existing:
            print("Outline already exists in input PDF; using it")
            return existing
        if existing:
            print("Outline already exists in input PDF; ignoring it")
            return extract_outline(self.args.input_file, params)
        if self.args.fromtxt:
            toc_file = self.args.fromtxt
            if toc_file == self.FROMTXT_DEFAULT_SENTINEL:
                toc_file = f"{self.base_path}_outline.txt"
            print(f"Using outline from {toc_file}")
            return read_outline_file(toc_file)
        return extract_outline(self.args.input_file, params)

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        examples = [
            "\nExamples:",
            "  python pdfoutliner.py paper.pdf",
            "  python pdfoutliner.py paper.pdf -o txt",
            "  python pdfoutliner.py paper.pdf out.pdf --fromtxt paper_outline.txt",
            "  python pdfoutliner.py paper.pdf -o stdout -p MAX_LEVELS=2,TOL_BIN_SIZE=4",
        ]
        parser = argparse.ArgumentParser(
            description="Reconstruct a PDF outline from the layout of its text.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
            epilog="\n".join(examples + ["", "Parameters: " + ", ".join(Params.names())]),
        )
        S = Application.FROMTXT_DEFAULT_SENTINEL

        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument("input_file", help="Path to the input PDF file.")
        g_opts.add_argument(
            "output_file",
            nargs="?",
            default=None,
            help="Output file path. (default: <input>_outlined.pdf or <input>_outline.txt)",
        )
        g_opts.add_argument(
            "-h",
            "--help",
            action="help",
            help="Show this help message and exit.",
        )

        g_proc = parser.add_argument_group("Processing Control")
        g_proc.add_argument(
            "-o",
            "--output",
            default="pdf",
            choices=["pdf", "txt", "stdout"],
            help="Output format. (default: %(default)s)",
        )
        g_proc.add_argument(
            "--ignore-existing",
            action="store_true",
            help="Extract an outline even if the PDF already has one.",
        )
        g_proc.add_argument(
            "--fromtxt",
            nargs="?",
            const=S,
            default=None,
            metavar="TOC_FILE",
            help="Add outline from a text file. (default: <input>_outline.txt)",
        )
        g_proc.add_argument(
            "-p",
            "--params",
            default=None,
            metavar="K=V,...",
            help="Override algorithm parameters, e.g. -p MAX_LEVELS=1",
        )
        g_proc.add_argument(
            "-c",
            "--config",
            default=None,
            metavar="FILE",
            help="INI file with [Params] and [Outline] sections.",
        )
        g_proc.add_argument(
            "--mark",
            action="store_true",
            help=f'Include "{MARK_TEXT}" as the first outline item.',
        )
        g_proc.add_argument(
            "--fold-level",
            type=int,
            default=None,
            metavar="LEVEL",
            help="Bookmarks at this level and deeper start collapsed. (default: 2)",
        )

        g_out = parser.add_argument_group("Logging")
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
            help="Enable DEBUG logging (all,style,columns,align,filter,restructure,build).",
        )

        return parser.parse_args(args)


def main(argv=None):
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:] if argv is None else argv)
        exit_code = Application(args).run()
    except KeyboardInterrupt:
        log.info("\nProcess interrupted by user. Exiting.")
        exit_code = 0
    except Exception as e:
        log.critical("\nAn unexpected error occurred: %s", e, exc_info=True)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
