"""Diagnostic messages and the error raised when catalog work cannot go on."""

from __future__ import annotations

from enum import Enum


class Message(Enum):
    """Every message the tool can print, in catalog order."""

    USAGE_HEAD = "Usage:"
    USAGE = (
        "  CDFILE         Catalog description file to scan\n"
        "  CTFILE         Catalog translation file to scan\n"
        "  POFILE         Catalog translation in PO-style format\n"
        "  CATALOG        Catalog file to create\n"
        "  NEWCTFILE      Catalog translation file to create\n"
        "  SOURCES        Sources to create; must be something like SFILE=SDFILE,\n"
        "                 where SFILE is a source file and SDFILE is a source\n"
        "                 description file\n"
        "  WARNCTGAPS     Warn about identifiers missing in translation\n"
        "  NOOPTIM        Do not skip unchanged strings in translation/description\n"
        "  FILL           Fill missing identifiers with original text\n"
        "  FLUSH          Flush memory after the catalog is created\n"
        "  NOBEEP         No DisplayBeep() on errors and warnings\n"
        "  QUIET          No warnings\n"
        "  NOLANGTOLOWER  Prevent #language name from being lowercased\n"
        "  NOBUFFEREDIO   Disable I/O buffers\n"
        "  MODIFIED       Create catalog only if description/translation have changed\n"
        "  COPYMSGNEW     Copy ***NEW*** markers over from old translation\n"
        "  OLDMSGNEW      Custom marker in old translation\n"
        "  CODESET        Codeset to force in output file (e.g. 'UTF-8')\n"
        "  VERSION        Force a certain version to be used during catalog generation\n"
        "  REVISION       Force a certain revision to be used during catalog generation\n"
        "  NOAUTODATE     no operation - kept for compatibility\n"
        "  NOSPACES       no operation - kept for compatibility"
    )
    FILEUPTODATE = "File '%s' is up to date"
    ERR_WARNING = "%s, line %d - warning:"
    ERR_ERROR = "%s, line %d - ERROR:"
    ERR_EXPECTEDHEX = "expected hex character (one of [0-9a-fA-F])"
    ERR_EXPECTEDOCTAL = "expected octal character (one of [0-7])"
    ERR_NOLENGTHBYTES = "lengthbytes cannot be larger than %d (sizeof long)"
    ERR_UNKNOWNCDCOMMAND = "unknown catalog description command"
    ERR_UNEXPECTEDBLANKS = "unexpected blanks"
    ERR_NOIDENTIFIER = "missing identifier"
    ERR_MISSINGSTRING = "unexpected end of file (missing catalog strings)"
    ERR_UNKNOWNCTCOMMAND = "unknown command in translation"
    ERR_UNKNOWNIDENTIFIER = "'%s' missing in catalog description"
    ERR_UNKNOWNSTRINGTYPE = "unknown string type"
    ERR_NOTERMINATEBRACKET = "unexpected end of line (missing ')')"
    ERR_NOBINCHARS = "binary characters in string type None"
    ERR_CTGAP = "'%s' missing in catalog translation"
    ERR_DOUBLECTLANGUAGE = "catalog language declared twice"
    ERR_DOUBLECTVERSION = "catalog version declared twice"
    ERR_WRONGRCSID = "incorrect RCS Id"
    ERR_NOMEMORY = "out of memory!"
    ERR_NOCATALOGDESCRIPTION = "cannot open catalog description '%s'"
    ERR_NOCATALOGTRANSLATION = "cannot open catalog translation '%s'"
    ERR_NOCTVERSION = (
        "missing catalog translation version\n"
        "Use either '## version' or '## rcsid' and '## name'"
    )
    ERR_NOCATALOG = "cannot open catalog file '%s'"
    ERR_NONEWCTFILE = "cannot create catalog translation '%s'"
    ERR_NOCTLANGUAGE = "missing catalog translation language"
    ERR_NOSOURCE = "cannot open source file '%s'"
    ERR_NOSOURCEDESCRIPTION = "cannot open source description file '%s'"
    ERR_NOCTARGUMENT = "creating a catalog requires a translation file"
    ERR_CANTCHECKDATE = "cannot get datestamp of '%s'"
    ERR_NOCTFILENAME = (
        "Catalog translation file name not specified at command line "
        "or as basename in description"
    )
    ERR_NOCATFILENAME = (
        "catalog file name not specified at command line or as basename in description"
    )
    ERR_BADPREFS = (
        "error processing 'FlexCat.prefs' variable, falling back to defaults\nTemplate:"
    )
    ERR_BADCTLANGUAGE = (
        "invalid language in catalog translation file\n"
        "Language MUST be a string with alphabetical characters "
        "and no inlined or trailing spaces"
    )
    ERR_DOUBLECTCODESET = "catalog codeset declared twice"
    ERR_BADCTCODESET = (
        "invalid codeset in catalog translation file\n"
        "Codeset MUST be a decimal number without any trailing spaces"
    )
    ERR_NOCTCODESET = "missing catalog translation codeset"
    ERR_ERROR_QUICK = "%s - ERROR:"
    ERR_BADCTVERSION = (
        "invalid version string in catalog translation file\n"
        "Version should be something like\n"
        "## version $VER: name version.revision (date)\n"
        "without any spaces in the name"
    )
    ERR_WARNING_QUICK = "%s - Warning:"
    ERR_MISSINGTRANSLATION = "missing translation for identifier '%s'"
    ERR_EMPTYTRANSLATION = "empty translation for identifier '%s'"
    ERR_MISMATCHINGCONTROLCHARACTERS = "mismatching trailing control characters"
    ERR_DOUBLE_IDENTIFIER = "identifier '%s' declared twice"
    ERR_STRING_TOO_SHORT = "string too short for identifier '%s'"
    ERR_STRING_TOO_LONG = "string too long for identifier '%s'"
    ERR_TRAILING_ELLIPSIS = (
        "original string has a trailing ellipsis ('...') for identifier '%s'"
    )
    ERR_NO_TRAILING_ELLIPSIS = (
        "original string doesn't have a trailing ellipsis ('...') for identifier '%s'"
    )
    ERR_TRAILING_BLANKS = "original string has trailing blanks for identifier '%s'"
    ERR_NO_TRAILING_BLANKS = (
        "original string doesn't have trailing blanks for identifier '%s'"
    )
    ERR_MISMATCHING_PLACEHOLDERS = "mismatching placeholders for identifier '%s'"
    ERR_MISSING_PLACEHOLDERS = "missing placeholders for identifier '%s'"
    ERR_EXCESSIVE_PLACEHOLDERS = "excessive placeholders for identifier '%s'"
    ERR_NO_LEADING_BRACKET = "missing '(' for identifier '%s'"
    ERR_NO_TRAILING_BRACKET = "missing ')' for identifier '%s'"
    ERR_DOUBLE_ID = "ID number used twice for identifier '%s'"
    ERR_NO_MIN_LEN = "expected MinLen (character '/') for identifier '%s'"
    ERR_NO_MAX_LEN = "expected MaxLen (character '/') for identifier '%s'"
    ERR_EXTRA_CHARACTERS = "extra characters at the end of the line"
    ERR_EXTRA_CHARACTERS_ID = "extra characters at the end of the line for identifier '%s'"
    ERR_NON_ASCII_CHARACTER = (
        "non-ASCII character 0x%02x found in original string for identifier '%s'"
    )
    ERR_NO_CAT_REVISION = "no catalog revision information found, using revision 0"
    ERR_CONVERSION_FAILED = "UTF8 conversion failed for identifier '%s'"
    ERR_UNKNOWN_SOURCE_CHARSET = "ERROR in CodesetsFind(): unknown source charset '%s'"
    ERR_UNKNOWN_DESTINATION_CHARSET = (
        "ERROR in CodesetsFind(): unknown destination charset '%s'"
    )
    ERR_INVALID_CHARS_FOUND = "ERROR in CodesetsConvertStr(): %d invalid characters found"
    ERR_ICONV_FAILED = "ERROR in iconv(): %s"
    ERR_ICONV_OPEN_FAILED = "ERROR in iconv_open(): %s"
    ERR_NO_CAT_VERSION = "no catalog version information found, using version 0"

    @property
    def text(self) -> str:
        """The raw message template."""
        return self.value


def format_message(message: Message, *args: object) -> str:
    """Fill a message template with its printf-style arguments."""
    if not args:
        return message.value
    return message.value % args


class CatalogError(Exception):
    """Raised when a catalog, translation or source file cannot be produced."""

    def __init__(self, message: Message, *args: object) -> None:
        self.message = message
        self.message_args = args
        super().__init__(format_message(message, *args))