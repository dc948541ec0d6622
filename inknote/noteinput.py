"""
inknote (extension-notability)

description: Notability .note file importer for Inkscape

Only the handwriting (curves) is imported.
Typed text, images and audio in the note are ignored.
"""

import os
import sys
import zipfile

import inkex

HERE = os.path.dirname(__file__) or "."
# This is suggested by https://docs.python-guide.org/writing/structure/.
sys.path.insert(0, os.path.abspath(os.path.join(HERE, "..")))

from inknote.errors import NoteReadError  # noqa: E402
from inknote.reader.read import NoteReader  # noqa: E402
from inknote.svg.convert import NoteConverter  # noqa: E402
from inknote.utils import to_pretty_xml  # noqa: E402


class NoteInput(inkex.InputExtension):
    """Open and convert .note files."""

    def add_arguments(self, pars):
        """Add command line arguments and inx parameter."""
        pars.add_argument(
            "--crop_to_content",
            type=inkex.Boolean,
            dest="crop_to_content",
            default=True,
            help="Crop the page to the handwriting.",
        )
        pars.add_argument(
            "--pretty",
            type=inkex.Boolean,
            dest="pretty_print",
            default=False,
            help="Create an SVG file that has several lines and looks pretty to read.",
        )
        pars.add_argument(
            "--debug",
            type=inkex.Boolean,
            dest="debug",
            default=False,
            help="Log what was found in the note.",
        )

    def load(self, stream):
        try:
            reader = NoteReader(stream, self.options.debug)
        except NoteReadError as e:
            raise inkex.AbortExtension(
                f"Could not read this note ({e.kind.value}): {e}"
            )
        except zipfile.BadZipFile as e:
            raise inkex.AbortExtension(f"Could not read this note: {e}")

        converter = NoteConverter()
        converter.convert(reader.document, self.options.crop_to_content)
        return self.svg_to_string(converter.doc.getroot())

    def svg_to_string(self, svg: inkex.SvgDocumentElement) -> bytes:
        """Convert the SvgDocumentElement to a string.

        This is mostly copied from inkex.elements._svg.SvgDocumentElement.tostring().
        """
        result = svg.tostring()
        if self.options.pretty_print:
            return to_pretty_xml(result)
        return result


def main():
    NoteInput().run()


if __name__ == "__main__":
    main()
