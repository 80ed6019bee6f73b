"""
Reference argument tables for a handful of GNU coreutils.

Each utility is a Utility (spec + reducer + settings factory) whose behavior
follows the GNU tools: long options abbreviate, repeated options override, and
one option may touch several settings at once (ls -o selects the long format
and hides the group column).

    >>> settings, _ = ls.parse(["-onCl", "--time=a", "src"])
    >>> settings.format, settings.long_no_group, settings.time, settings.files
    ('long', True, 'access', ['src'])

Utilities: comm, cp, mv, timeout, tail, head, mktemp, b2sum, ls.
"""
import functools
import logging
import os
import re
import sys
from collections import namedtuple
from dataclasses import dataclass, field

from .arguments import AtLeast, DeprecatedNumeric, Exactly, Operand, Option, Range, Spec, Spelling
from .prefixes import infer
from .settings import Reducer, Utility
from .utils import rename

logger = logging.getLogger(__name__)


def _store(name, value=True, /):
    # handler setting one field to a constant
    def handler(settings, event):
        setattr(settings, name, value)
    return rename(handler, "store_" + name)


def _assign(name, /):
    # handler setting one field to the (converted) event value
    def handler(settings, event):
        setattr(settings, name, event.value)
    return rename(handler, "assign_" + name)


def _append(name, /):
    def handler(settings, event):
        getattr(settings, name).append(event.value)
    return rename(handler, "append_" + name)


def _standard(reducer, /):
    reducer.on("help")(_store("help"))
    reducer.on("version")(_store("version"))


@dataclass
class Common:
    help: bool = False
    version: bool = False


class TargetUtility(Utility):
    """
    SOURCE... DEST utilities (cp, mv).

    The destination leaves the operand list when it is given through
    -t/--target-directory, and -T/--no-target-directory pins the operands to
    exactly SOURCE DEST. The options are read first with a catch-all operand
    slot; the actual parse then runs against the layout they select.
    """

    def __init__(self, options, reducer, factory, /, *, name=None):
        source = Operand("source", AtLeast(1), "SOURCE")
        dest = Operand("dest", Exactly(1), "DEST")
        super().__init__(Spec(options, [source, dest], standard=True), reducer, factory, name=name)
        self.probe = Spec(options, [Operand("source", AtLeast(0), "SOURCE")], standard=True)
        self.targeted = Spec(options, [source], standard=True)
        self.paired = Spec(options, [Operand("source", Exactly(1), "SOURCE"), dest], standard=True)

    def parse(self, args, /):
        args = tuple(args)
        probe, _ = Utility(self.probe, self.reducer, self.factory).parse(args)
        if probe.target_directory is not None:
            spec = self.targeted
        elif probe.no_target_directory:
            spec = self.paired
        else:
            spec = self.spec
        return Utility(spec, self.reducer, self.factory, name=self.name).parse(args)


# comm

@dataclass
class CommSettings(Common):
    suppress: set = field(default_factory=set)
    check_order: bool | None = None
    delimiter: str = "\t"
    total: bool = False
    zero_terminated: bool = False
    files: list = field(default_factory=list)


_comm = Reducer()
_standard(_comm)
_comm.on("file1", "file2")(_append("files"))
_comm.on("check-order")(_store("check_order", True))
_comm.on("nocheck-order")(_store("check_order", False))
_comm.on("output-delimiter")(_assign("delimiter"))
_comm.on("total")(_store("total"))
_comm.on("zero-terminated")(_store("zero_terminated"))


@_comm.on("suppress-1", "suppress-2", "suppress-3")
def _suppress(settings, event):
    settings.suppress.add(int(event.identity[-1]))


comm = Utility(
    Spec(
        [
            Option("suppress-1", "-1", descr="suppress column 1 (lines unique to FILE1)"),
            Option("suppress-2", "-2", descr="suppress column 2 (lines unique to FILE2)"),
            Option("suppress-3", "-3", descr="suppress column 3 (lines that appear in both files)"),
            Option("check-order", "--check-order"),
            Option("nocheck-order", "--nocheck-order"),
            Option("output-delimiter", "--output-delimiter=STR"),
            Option("total", "--total"),
            Option("zero-terminated", "-z", "--zero-terminated"),
        ],
        [
            Operand("file1", 1, "FILE1"),
            Operand("file2", 1, "FILE2"),
        ],
        standard=True,
    ),
    _comm,
    CommSettings,
    name="comm",
)


# cp and mv

BACKUP = {
    "none": "none",
    "off": "none",
    "numbered": "numbered",
    "t": "numbered",
    "existing": "existing",
    "nil": "existing",
    "simple": "simple",
    "never": "simple",
}

UPDATE = ("all", "none", "none-fail", "older")

PRESERVE = ("mode", "ownership", "timestamps", "context", "links", "xattr", "all")


def _attributes(value):
    attributes = set(filter(None, value.split(",")))
    if unknown := attributes.difference(PRESERVE):
        raise ValueError("unknown attribute(s): %s" % ", ".join(sorted(unknown)))
    if "all" in attributes:
        return set(PRESERVE) - {"all"}
    return attributes


@dataclass
class CopySettings(Common):
    overwrite: str = "replace"
    backup: str | None = None
    suffix: str = "~"
    target_directory: str | None = None
    no_target_directory: bool = False
    update: str = "all"
    verbose: bool = False
    recursive: bool = False
    dereference: str | None = None
    preserve: set = field(default_factory=set)
    mode: str = "copy"
    parents: bool = False
    attributes_only: bool = False
    copy_contents: bool = False
    remove_destination: bool = False
    sparse: str = "auto"
    strip_trailing_slashes: bool = False
    one_file_system: bool = False
    context: bool = False
    source: list = field(default_factory=list)
    dest: str | None = None


def _transfer(reducer, /):
    # handlers shared by cp and mv
    _standard(reducer)
    reducer.on("source")(_append("source"))
    reducer.on("dest")(_assign("dest"))
    reducer.on("force")(_store("overwrite", "force"))
    reducer.on("interactive")(_store("overwrite", "interactive"))
    reducer.on("no-clobber")(_store("overwrite", "no-clobber"))
    reducer.on("backup")(_assign("backup"))
    reducer.on("suffix")(_assign("suffix"))
    reducer.on("target-directory")(_assign("target_directory"))
    reducer.on("no-target-directory")(_store("no_target_directory"))
    reducer.on("update")(_assign("update"))
    reducer.on("verbose")(_store("verbose"))
    reducer.on("strip-trailing-slashes")(_store("strip_trailing_slashes"))
    reducer.on("context")(_store("context"))


def _transfer_options():
    return [
        Option("backup", "-b", "--backup[=CONTROL]", choices=BACKUP, default="existing"),
        Option("force", "-f", "--force"),
        Option("interactive", "-i", "--interactive"),
        Option("no-clobber", "-n", "--no-clobber"),
        Option("suffix", "-S SUFFIX", "--suffix=SUFFIX"),
        Option("target-directory", "-t DIRECTORY", "--target-directory=DIRECTORY"),
        Option("no-target-directory", "-T", "--no-target-directory"),
        Option("update", "-u", "--update[=UPDATE]", choices=UPDATE, default="older"),
        Option("verbose", "-v", "--verbose"),
        Option("strip-trailing-slashes", "--strip-trailing-slashes"),
        Option("context", "-Z", "--context"),
    ]


_cp = Reducer()
_transfer(_cp)
_cp.on("recursive")(_store("recursive"))
_cp.on("dereference")(_store("dereference", "always"))
_cp.on("no-dereference")(_store("dereference", "never"))
_cp.on("dereference-command-line")(_store("dereference", "command-line"))
_cp.on("link")(_store("mode", "link"))
_cp.on("symbolic-link")(_store("mode", "symlink"))
_cp.on("parents")(_store("parents"))
_cp.on("attributes-only")(_store("attributes_only"))
_cp.on("copy-contents")(_store("copy_contents"))
_cp.on("remove-destination")(_store("remove_destination"))
_cp.on("sparse")(_assign("sparse"))
_cp.on("one-file-system")(_store("one_file_system"))


@_cp.on("archive")
def _archive(settings, event):
    settings.recursive = True
    settings.dereference = "never"
    settings.preserve = set(PRESERVE) - {"all"}


@_cp.on("d")
def _no_dereference_links(settings, event):
    settings.dereference = "never"
    settings.preserve.add("links")


@_cp.on("preserve", type=_attributes)
def _preserve(settings, event):
    settings.preserve |= event.value


@_cp.on("no-preserve", type=_attributes)
def _no_preserve(settings, event):
    settings.preserve -= event.value


cp = TargetUtility(
    _transfer_options() + [
        Option("archive", "-a", "--archive"),
        Option("attributes-only", "--attributes-only"),
        Option("copy-contents", "--copy-contents"),
        Option("d", "-d"),
        Option("dereference-command-line", "-H"),
        Option("link", "-l", "--link"),
        Option("dereference", "-L", "--dereference"),
        Option("no-dereference", "-P", "--no-dereference"),
        Option("preserve", "-p", "--preserve[=ATTR_LIST]", default="mode,ownership,timestamps"),
        Option("no-preserve", "--no-preserve=ATTR_LIST"),
        Option("parents", "--parents"),
        Option("recursive", "-R", "-r", "--recursive"),
        Option("remove-destination", "--remove-destination"),
        Option("sparse", "--sparse=WHEN", choices=("auto", "always", "never")),
        Option("symbolic-link", "-s", "--symbolic-link"),
        Option("one-file-system", "-x", "--one-file-system"),
    ],
    _cp,
    CopySettings,
    name="cp",
)


_mv = Reducer()
_transfer(_mv)

mv = TargetUtility(_transfer_options(), _mv, CopySettings, name="mv")


# timeout

_DURATION = re.compile(r"(?P<number>[0-9]*\.?[0-9]+)(?P<unit>[smhd]?)")
_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def duration(value):
    """
    seconds in a timeout duration ("10", "1.5m", "2h"); ValueError otherwise.
    """
    if not (match := _DURATION.fullmatch(value)):
        raise ValueError("invalid time interval %r" % value)
    return float(match["number"]) * _UNITS[match["unit"]]


@dataclass
class TimeoutSettings(Common):
    duration: float | None = None
    kill_after: float | None = None
    signal: str = "TERM"
    foreground: bool = False
    preserve_status: bool = False
    verbose: bool = False
    command: list = field(default_factory=list)


_timeout = Reducer()
_standard(_timeout)
_timeout.on("duration", type=duration)(_assign("duration"))
_timeout.on("kill-after", type=duration)(_assign("kill_after"))
_timeout.on("signal", type=str.upper)(_assign("signal"))
_timeout.on("foreground")(_store("foreground"))
_timeout.on("preserve-status")(_store("preserve_status"))
_timeout.on("verbose")(_store("verbose"))
_timeout.on("command")(_append("command"))

timeout = Utility(
    Spec(
        [
            Option("foreground", "--foreground"),
            Option("kill-after", "-k DURATION", "--kill-after=DURATION"),
            Option("preserve-status", "--preserve-status"),
            Option("signal", "-s SIGNAL", "--signal=SIGNAL"),
            Option("verbose", "-v", "--verbose"),
        ],
        [
            Operand("duration", 1, "DURATION"),
            Operand("command", AtLeast(1), "COMMAND", greedy=True),
        ],
        standard=True,
    ),
    _timeout,
    TimeoutSettings,
    name="timeout",
)


# tail and head

Shorthand = namedtuple("Shorthand", ("number", "from_start", "mode", "follow"))

_TAIL_SUFFIX = re.compile(r"(?P<mode>[lcb]?)(?P<follow>f?)")
_MODES = {"": "lines", "l": "lines", "c": "bytes", "b": "blocks"}


def _tail_shorthand(sign, digits, suffix):
    if not (match := _TAIL_SUFFIX.fullmatch(suffix)):
        raise ValueError("invalid suffix %r" % suffix)
    return Shorthand(int(digits), sign == "+", _MODES[match["mode"]], bool(match["follow"]))


def count(value):
    """
    (from_start, number) for tail -n/-c values ("+5" counts from the start).
    """
    from_start = value.startswith("+")
    number = int(value[1:] if value[:1] in ("+", "-") else value)
    if number < 0:
        raise ValueError("invalid number %r" % value)
    return from_start, number


@dataclass
class TailSettings(Common):
    number: int = 10
    from_start: bool = False
    mode: str = "lines"
    follow: str | None = None
    retry: bool = False
    max_unchanged_stats: int = 5
    pid: int | None = None
    sleep_interval: float = 1.0
    verbose: bool = False
    zero_terminated: bool = False
    presume_input_pipe: bool = False
    files: list = field(default_factory=list)


_tail = Reducer()
_standard(_tail)
_tail.on("follow")(_assign("follow"))
_tail.on("max-unchanged-stats", type=int)(_assign("max_unchanged_stats"))
_tail.on("pid", type=int)(_assign("pid"))
_tail.on("quiet")(_store("verbose", False))
_tail.on("retry")(_store("retry"))
_tail.on("sleep-interval", type=float)(_assign("sleep_interval"))
_tail.on("verbose")(_store("verbose"))
_tail.on("zero-terminated")(_store("zero_terminated"))
_tail.on("presume-input-pipe")(_store("presume_input_pipe"))
_tail.on("files")(_append("files"))


@_tail.on("bytes", "lines", type=count)
def _tail_count(settings, event):
    settings.from_start, settings.number = event.value
    settings.mode = event.identity


@_tail.on("follow-retry")
def _follow_retry(settings, event):
    settings.follow = "name"
    settings.retry = True


@_tail.on("shorthand")
def _tail_obsolete(settings, event):
    settings.number, settings.from_start, settings.mode, follow = event.value
    settings.follow = "descriptor" if follow else None


tail = Utility(
    Spec(
        [
            Option("bytes", "-c NUM", "--bytes=NUM"),
            Option("follow", "-f", "--follow[=HOW]", choices=("descriptor", "name"), default="descriptor"),
            Option("follow-retry", "-F"),
            Option("lines", "-n NUM", "--lines=NUM"),
            Option("max-unchanged-stats", "--max-unchanged-stats=N"),
            Option("pid", "--pid=PID"),
            Option("quiet", "-q", "--quiet", "--silent"),
            Option("retry", "--retry"),
            Option("sleep-interval", "-s N", "--sleep-interval=N"),
            Option("verbose", "-v", "--verbose"),
            Option("zero-terminated", "-z", "--zero-terminated"),
            Option("presume-input-pipe", "---presume-input-pipe"),
        ],
        [
            Operand("files", AtLeast(0), "FILE"),
        ],
        [
            DeprecatedNumeric("-", "shorthand", "lcbf", functools.partial(_tail_shorthand, "-"), leading=True),
            DeprecatedNumeric("+", "shorthand", "lcbf", functools.partial(_tail_shorthand, "+"), leading=True),
        ],
        standard=True,
    ),
    _tail,
    TailSettings,
    name="tail",
)


_HEAD_SUFFIX = re.compile(r"(?P<unit>[bkm]?)(?P<mode>[cl]?)(?P<header>[qv]?)")
_MULTIPLIERS = {"": 1, "b": 512, "k": 1024, "m": 1024 * 1024}


def _head_shorthand(digits, suffix):
    if not (match := _HEAD_SUFFIX.fullmatch(suffix)):
        raise ValueError("invalid suffix %r" % suffix)
    mode = "bytes" if match["unit"] or match["mode"] == "c" else "lines"
    verbose = {"": None, "q": False, "v": True}[match["header"]]
    return int(digits) * _MULTIPLIERS[match["unit"]], mode, verbose


def head_count(value):
    """
    (all_but_last, number) for head -n/-c values ("-5" means all but the last 5).
    """
    all_but_last = value.startswith("-")
    number = int(value.removeprefix("-"))
    if number < 0:
        raise ValueError("invalid number %r" % value)
    return all_but_last, number


@dataclass
class HeadSettings(Common):
    number: int = 10
    all_but_last: bool = False
    mode: str = "lines"
    verbose: bool | None = None
    zero_terminated: bool = False
    files: list = field(default_factory=list)


_head = Reducer()
_standard(_head)
_head.on("quiet")(_store("verbose", False))
_head.on("verbose")(_store("verbose", True))
_head.on("zero-terminated")(_store("zero_terminated"))
_head.on("files")(_append("files"))


@_head.on("bytes", "lines", type=head_count)
def _head_count(settings, event):
    settings.all_but_last, settings.number = event.value
    settings.mode = event.identity


@_head.on("shorthand")
def _head_obsolete(settings, event):
    settings.number, settings.mode, verbose = event.value
    settings.all_but_last = False
    if verbose is not None:
        settings.verbose = verbose


head = Utility(
    Spec(
        [
            Option("bytes", "-c NUM", "--bytes=NUM"),
            Option("lines", "-n NUM", "--lines=NUM"),
            Option("quiet", "-q", "--quiet", "--silent"),
            Option("verbose", "-v", "--verbose"),
            Option("zero-terminated", "-z", "--zero-terminated"),
        ],
        [
            Operand("files", AtLeast(0), "FILE"),
        ],
        [
            DeprecatedNumeric("-", "shorthand", "bkmclqv", _head_shorthand, leading=True),
        ],
        standard=True,
    ),
    _head,
    HeadSettings,
    name="head",
)


# mktemp

@dataclass
class MktempSettings(Common):
    directory: bool = False
    dry_run: bool = False
    quiet: bool = False
    suffix: str | None = None
    treat_as_template: bool = False
    tmpdir: str | None = None
    template: str | None = None


_mktemp = Reducer()
_standard(_mktemp)
_mktemp.on("directory")(_store("directory"))
_mktemp.on("dry-run")(_store("dry_run"))
_mktemp.on("quiet")(_store("quiet"))
_mktemp.on("suffix")(_assign("suffix"))
_mktemp.on("t")(_store("treat_as_template"))
_mktemp.on("tmpdir")(_assign("tmpdir"))
_mktemp.on("template")(_assign("template"))

mktemp = Utility(
    Spec(
        [
            Option("directory", "-d", "--directory"),
            Option("dry-run", "-u", "--dry-run"),
            Option("quiet", "-q", "--quiet"),
            Option("suffix", "--suffix=SUFFIX"),
            Option("t", "-t"),
            Option("tmpdir", "-p DIR", "--tmpdir[=DIR]", default="."),
        ],
        [
            Operand("template", Range(0, 1), "TEMPLATE"),
        ],
        standard=True,
    ),
    _mktemp,
    MktempSettings,
    name="mktemp",
)


# b2sum

@dataclass
class ChecksumSettings(Common):
    binary: bool = False
    check: bool = False
    tag: bool = False
    length: int | None = None
    check_output: str = "warn"
    strict: bool = False
    ignore_missing: bool = False
    zero: bool = False
    files: list = field(default_factory=list)


_b2sum = Reducer()
_standard(_b2sum)
_b2sum.on("binary")(_store("binary", True))
_b2sum.on("text")(_store("binary", False))
_b2sum.on("check")(_store("check"))
_b2sum.on("tag")(_store("tag"))
_b2sum.on("length", type=int)(_assign("length"))
_b2sum.on("quiet")(_store("check_output", "quiet"))
_b2sum.on("status")(_store("check_output", "status"))
_b2sum.on("warn")(_store("check_output", "warn"))
_b2sum.on("strict")(_store("strict"))
_b2sum.on("ignore-missing")(_store("ignore_missing"))
_b2sum.on("zero")(_store("zero"))
_b2sum.on("files")(_append("files"))

b2sum = Utility(
    Spec(
        [
            Option("binary", "-b", "--binary"),
            Option("check", "-c", "--check"),
            Option("length", "-l LENGTH", "--length=LENGTH"),
            Option("tag", "--tag"),
            Option("text", "-t", "--text"),
            Option("zero", "-z", "--zero"),
            Option("ignore-missing", "--ignore-missing"),
            Option("quiet", "--quiet"),
            Option("status", "--status"),
            Option("strict", "--strict"),
            Option("warn", "-w", "--warn"),
        ],
        [
            Operand("files", AtLeast(0), "FILE"),
        ],
        standard=True,
    ),
    _b2sum,
    ChecksumSettings,
    name="b2sum",
)


# ls

WHEN = {
    "always": "always",
    "yes": "always",
    "force": "always",
    "never": "never",
    "no": "never",
    "none": "never",
    "auto": "auto",
    "tty": "auto",
    "if-tty": "auto",
}

FORMAT = {
    "verbose": "long",
    "long": "long",
    "commas": "commas",
    "horizontal": "across",
    "across": "across",
    "vertical": "columns",
    "single-column": "single-column",
}

SORT = ("none", "time", "size", "extension", "version", "width", "name")

TIME = {
    "atime": "access",
    "access": "access",
    "use": "access",
    "ctime": "change",
    "status": "change",
    "mtime": "modification",
    "modification": "modification",
    "birth": "birth",
    "creation": "birth",
}

QUOTING = ("literal", "shell", "shell-always", "shell-escape", "shell-escape-always", "c", "escape")

INDICATOR = ("none", "slash", "file-type", "classify")


def _enabled(when):
    if when == "auto":
        return sys.stdout.isatty()
    return when == "always"


def _terminal_width():
    if (columns := os.environ.get("COLUMNS")) is not None:
        try:
            return int(columns)
        except ValueError:
            logger.warning("ignoring invalid width in environment variable COLUMNS: %r", columns)
    return 80


@dataclass
class ListSettings(Common):
    format: str = "columns"
    which_files: str = "default"
    sort: str = "name"
    time: str = "modification"
    reverse: bool = False
    recursive: bool = False
    directory: bool = False
    dereference: str = "dir-args"
    ignore_patterns: list = field(default_factory=list)
    hide_patterns: list = field(default_factory=list)
    ignore_backups: bool = False
    inode: bool = False
    allocation_size: bool = False
    size_format: str = "bytes"
    color: bool = False
    hyperlink: bool = False
    long_author: bool = False
    long_no_group: bool = False
    long_no_owner: bool = False
    long_numeric_uid_gid: bool = False
    width: int = field(default_factory=_terminal_width)
    quoting_style: str = "shell-escape"
    indicator_style: str = "none"
    hide_control_chars: bool = False
    context: bool = False
    dired: bool = False
    group_directories_first: bool = False
    eol: str = "\n"
    files: list = field(default_factory=list)


_ls = Reducer()
_standard(_ls)
_ls.on("all")(_store("which_files", "all"))
_ls.on("almost-all")(_store("which_files", "almost-all"))
_ls.on("author")(_store("long_author"))
_ls.on("time")(_assign("time"))
_ls.on("sort")(_assign("sort"))
_ls.on("context")(_store("context"))
_ls.on("ignore-backups")(_store("ignore_backups"))
_ls.on("directory")(_store("directory"))
_ls.on("dired")(_store("dired"))
_ls.on("inode")(_store("inode"))
_ls.on("ignore")(_append("ignore_patterns"))
_ls.on("hide")(_append("hide_patterns"))
_ls.on("reverse")(_store("reverse"))
_ls.on("recursive")(_store("recursive"))
_ls.on("width", type=int)(_assign("width"))
_ls.on("size")(_store("allocation_size"))
_ls.on("no-group")(_store("long_no_group"))
_ls.on("format")(_assign("format"))
_ls.on("single-column")(_store("format", "single-column"))
_ls.on("indicator-style")(_assign("indicator_style"))
_ls.on("dereference")(_store("dereference", "all"))
_ls.on("dereference-command-line")(_store("dereference", "args"))
_ls.on("dereference-command-line-symlink-to-dir")(_store("dereference", "dir-args"))
_ls.on("human-readable")(_store("size_format", "human"))
_ls.on("si")(_store("size_format", "si"))
_ls.on("kibibytes")(_store("size_format", "kibibytes"))
_ls.on("quoting-style")(_assign("quoting_style"))
_ls.on("hide-control-chars")(_store("hide_control_chars", True))
_ls.on("show-control-chars")(_store("hide_control_chars", False))
_ls.on("group-directories-first")(_store("group_directories_first"))
_ls.on("files")(_append("files"))


@_ls.on("long-no-owner")
def _long_no_owner(settings, event):
    settings.format = "long"
    settings.long_no_owner = True


@_ls.on("long-no-group")
def _long_no_group(settings, event):
    settings.format = "long"
    settings.long_no_group = True


@_ls.on("numeric-uid-gid")
def _numeric_uid_gid(settings, event):
    settings.format = "long"
    settings.long_numeric_uid_gid = True


@_ls.on("classify")
def _classify(settings, event):
    settings.indicator_style = "classify" if _enabled(event.value) else "none"


@_ls.on("color")
def _color(settings, event):
    settings.color = _enabled(event.value)


@_ls.on("hyperlink")
def _hyperlink(settings, event):
    settings.hyperlink = _enabled(event.value)


@_ls.on("zero")
def _zero(settings, event):
    settings.eol = "\0"
    settings.hide_control_chars = False


ls = Utility(
    Spec(
        [
            Option("all", "-a", "--all"),
            Option("almost-all", "-A", "--almost-all"),
            Option("author", "--author"),
            Option("time", "--time=WORD", Spelling("-c", default="change"), Spelling("-u", default="access"), choices=TIME),
            Option(
                "sort",
                "--sort=WORD",
                Spelling("-t", default="time"),
                Spelling("-S", default="size"),
                Spelling("-U", default="none"),
                Spelling("-v", default="version"),
                Spelling("-X", default="extension"),
                choices=SORT,
            ),
            Option("context", "-Z", "--context"),
            Option("ignore-backups", "-B", "--ignore-backups"),
            Option("directory", "-d", "--directory"),
            Option("dired", "-D", "--dired"),
            Option("hyperlink", "--hyperlink[=WHEN]", choices=WHEN, default="always"),
            Option("inode", "-i", "--inode"),
            Option("ignore", "-I PATTERN", "--ignore=PATTERN"),
            Option("hide", "--hide=PATTERN"),
            Option("reverse", "-r", "--reverse"),
            Option("recursive", "-R", "--recursive"),
            Option("width", "-w COLS", "--width=COLS"),
            Option("size", "-s", "--size"),
            Option("no-group", "-G", "--no-group"),
            Option(
                "format",
                "--format=WORD",
                Spelling("-l", default="long"),
                Spelling("-C", default="columns"),
                Spelling("-x", default="across"),
                Spelling("-m", default="commas"),
                choices=FORMAT,
            ),
            Option("single-column", "-1"),
            Option("long-no-group", "-o"),
            Option("long-no-owner", "-g"),
            Option("numeric-uid-gid", "-n", "--numeric-uid-gid"),
            Option(
                "indicator-style",
                "--indicator-style=WORD",
                Spelling("-p", default="slash"),
                Spelling("--file-type", default="file-type"),
                choices=INDICATOR,
            ),
            Option("classify", "-F", "--classify[=WHEN]", choices=WHEN, default="always"),
            Option("dereference", "-L", "--dereference"),
            Option("dereference-command-line", "-H", "--dereference-command-line"),
            Option("dereference-command-line-symlink-to-dir", "--dereference-command-line-symlink-to-dir"),
            Option("human-readable", "-h", "--human-readable"),
            Option("kibibytes", "-k", "--kibibytes"),
            Option("si", "--si"),
            Option(
                "quoting-style",
                "--quoting-style=WORD",
                Spelling("-N", default="literal"),
                Spelling("--literal", default="literal"),
                Spelling("-b", default="escape"),
                Spelling("--escape", default="escape"),
                Spelling("-Q", default="c"),
                Spelling("--quote-name", default="c"),
                choices=QUOTING,
            ),
            Option("color", "--color[=WHEN]", choices=WHEN, default="always"),
            Option("hide-control-chars", "-q", "--hide-control-chars"),
            Option("show-control-chars", "--show-control-chars"),
            Option("zero", "--zero"),
            Option("group-directories-first", "--group-directories-first"),
        ],
        [
            Operand("files", AtLeast(0), "FILE"),
        ],
        standard=True,
    ),
    _ls,
    ListSettings,
    name="ls",
)


UTILITIES = {
    "comm": comm,
    "cp": cp,
    "mv": mv,
    "timeout": timeout,
    "tail": tail,
    "head": head,
    "mktemp": mktemp,
    "b2sum": b2sum,
    "ls": ls,
}


# multi-call front end: the first free value names the utility, the rest is
# handed to it untouched

_multicall = Reducer()


@_multicall.on("utility")
def _utility(settings, event):
    settings["utility"] = infer(event.value, UTILITIES, identity="utility", input=event.input)


@_multicall.on("args")
def _args(settings, event):
    settings["args"].append(event.value)


multicall = Utility(
    Spec(
        operands=[
            Operand("utility", 1, "UTILITY"),
            Operand("args", AtLeast(0), "ARG", greedy=True),
        ],
        interleave=False,
    ),
    _multicall,
    lambda: {"utility": None, "args": []},
    name="coreutils",
)


def dispatch(args, /):
    """
    run one utility through the multi-call front end: `args[0]` names it
    (unambiguous abbreviations accepted), the rest is its argument vector.

    returns (utility, settings, trailing).
    """
    selected, _ = multicall.parse(args)
    utility = selected["utility"]
    return utility, *utility.parse(selected["args"])


__all__ = (
    "TargetUtility",
    "duration",
    "count",
    "head_count",
    "Shorthand",
    "comm",
    "cp",
    "mv",
    "timeout",
    "tail",
    "head",
    "mktemp",
    "b2sum",
    "ls",
    "UTILITIES",
    "multicall",
    "dispatch",
)
