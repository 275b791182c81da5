#!/usr/bin/env python
import io
import json
import logging
import sys
import typing
from pathlib import Path

import toml
from rich.logging import RichHandler
from rich.prompt import Confirm
from traitlets import Bool, Dict, List, TraitError, Unicode, default, validate
from traitlets.config import Application, Configurable
from traitlets.config.loader import Config

from pyargscan.config import legacy
from pyargscan.registry import OptionRegistry
from pyargscan.scanner import Arguments


class General(Configurable):
    """ """

    strict = Bool(False, help="Refuse unregistered short options instead of returning their character code.").tag(config=True)
    skip_program_name = Bool(True, help="Treat the first token as program name and do not scan it.").tag(config=True)


class Options(Configurable):
    """Registered option spellings."""

    table = Dict(
        default_value={},
        help="""Mapping of option spelling to key, e.g. {"--quiet": "q", "--mode=": 256}.
One-character strings are converted to their character code.
A trailing '=' marks a long option taking a parameter.""",
    ).tag(config=True)

    @validate("table")
    def _validate_table(self, proposal):
        table = {}
        for spelling, key in proposal["value"].items():
            if isinstance(key, str) and len(key) == 1:
                key = ord(key)
            if not isinstance(spelling, str) or len(spelling) < 2 or not spelling.startswith("-"):
                raise TraitError(f"Invalid option spelling {spelling!r}.")
            if isinstance(key, bool) or not isinstance(key, int) or key <= 0:
                raise TraitError(f"Key for option {spelling!r} must be a positive integer or a single character, got {key!r}.")
            table[spelling] = key
        return table

    def registry(self) -> OptionRegistry:
        return OptionRegistry(self.table)

    def register(self, arguments: Arguments) -> None:
        for spelling, key in self.table.items():
            arguments.register_option(spelling, key)


def _write_config(argscan, dest_file, app):
    if dest_file:
        dest = Path(dest_file)
        if dest.exists():
            if not Confirm.ask(f"Destination file [green]{dest.name!r}[/green] already exists. Do you want to overwrite it?"):
                print("Aborting...")
                app.exit(1)
        with dest.open("w", encoding="utf-8") as out_file:
            argscan.generate_config_file(out_file)
    else:
        argscan.generate_config_file(sys.stdout)


class ProfileCreate(Application):
    description = "\nCreate a new profile"

    dest_file = Unicode(default_value=None, allow_none=True, help="destination file name").tag(config=True)
    aliases = Dict(  # type:ignore[assignment]
        dict(
            d="ProfileCreate.dest_file",
            o="ProfileCreate.dest_file",
        )
    )

    def start(self):
        _write_config(self.parent.parent, self.dest_file, self)


class ProfileConvert(Application):
    description = "\nConvert legacy configuration file (.json/.toml) to new Python based format."

    config_file = Unicode(help="Name of legacy config file (.json/.toml).", default_value=None, allow_none=False).tag(
        config=True
    )
    dest_file = Unicode(default_value=None, allow_none=True, help="destination file name").tag(config=True)

    aliases = Dict(  # type:ignore[assignment]
        dict(
            c="ProfileConvert.config_file",
            d="ProfileConvert.dest_file",
            o="ProfileConvert.dest_file",
        )
    )

    def start(self):
        argscan = self.parent.parent
        argscan._read_configuration(self.config_file, emit_warning=False)
        _write_config(argscan, self.dest_file, self)


class ProfileApp(Application):
    subcommands = Dict(
        dict(
            create=(ProfileCreate, ProfileCreate.description.splitlines()[1]),
            convert=(ProfileConvert, ProfileConvert.description.splitlines()[1]),
        )
    )

    def start(self):
        if self.subapp is None:
            print(f"No subcommand specified. Must specify one of: {list(self.subcommands.keys())}")
            print()
            self.print_description()
            self.print_subcommands()
            self.exit(1)
        else:
            self.subapp.start()


class ArgScan(Application):
    description = "Classify command line tokens into options and arguments."
    config_file = Unicode(default_value="argscan_conf.py", help="base name of config file").tag(config=True)

    classes = List([General, Options])

    subcommands = dict(
        profile=(
            ProfileApp,
            "Create or convert configuration files",
        )
    )

    flags = Dict(  # type:ignore[assignment]
        dict(
            debug=({"ArgScan": {"log_level": 10}}, "Set loglevel to DEBUG"),
            strict=({"General": {"strict": True}}, "Refuse unregistered short options"),
        )
    )

    aliases = Dict(  # type:ignore[assignment]
        dict(
            c="ArgScan.config_file",
            log_level="ArgScan.log_level",
            l="ArgScan.log_level",
        )
    )

    @default("log_level")
    def _default_value(self):
        return logging.INFO  # traitlets default is logging.WARN

    def initialize(self, argv=None):
        from pyargscan import __version__ as pyargscan_version

        ArgScan.version = pyargscan_version
        ArgScan.name = Path(sys.argv[0]).name
        self.parse_command_line(argv)

    def start(self):
        if self.subapp:
            self.subapp.start()
            self.exit(0)
        has_handlers = logging.getLogger().hasHandlers()
        if has_handlers:
            self.log = logging.getLogger()
            self._read_configuration(self.config_file)
        else:
            self._read_configuration(self.config_file)
            self._setup_logger()
        self.log.debug(f"pyargscan version: {self.version}")

    def _setup_logger(self):
        from pyargscan.types import OptionResult

        # Remove any handlers installed by `traitlets`.
        for hdl in list(self.log.handlers):
            self.log.removeHandler(hdl)

        keywords = list(OptionResult.__members__.keys())
        rich_handler = RichHandler(
            rich_tracebacks=True,
            tracebacks_show_locals=True,
            log_time_format=self.log_datefmt,
            level=self.log_level,
            keywords=keywords,
        )
        self.log.addHandler(rich_handler)

    def _read_configuration(self, file_name: str, emit_warning: bool = True) -> None:
        required = file_name != self.traits()["config_file"].default_value
        if required or Path(file_name).exists():
            self.read_configuration_file(file_name, emit_warning)
        self.general = General(config=self.config, parent=self)
        self.options = Options(config=self.config, parent=self)

    def read_configuration_file(self, file_name: str, emit_warning: bool = True):
        self.legacy_config: bool = False

        pth = Path(file_name)
        if not pth.exists():
            raise FileNotFoundError(f"Configuration file {file_name!r} does not exist.")
        suffix = pth.suffix.lower()
        if suffix == ".py":
            self.load_config_file(pth.name, path=str(pth.parent))
            return self.config
        self.legacy_config = True
        if suffix == ".json":
            reader = json
        elif suffix == ".toml":
            reader = toml
        else:
            raise ValueError(f"Unknown file type for config: {suffix}")
        with pth.open("r") as f:
            if emit_warning:
                self.log.warning(f"Legacy configuration file format ({suffix}), please use Python based configuration.")
            cfg = reader.loads(f.read())
        if cfg:
            new_config = Config()
            new_config.merge(legacy.convert_config(cfg, self.log))
            # Command line wins over file contents.
            new_config.merge(self.cli_config)
            self.update_config(new_config)
        return cfg

    def create_arguments(self, argv: typing.Sequence[str]) -> Arguments:
        """Create a scanner over `argv`, set up from the loaded configuration."""
        arguments = Arguments(argv, strict=self.general.strict, skip_program_name=self.general.skip_program_name)
        self.options.register(arguments)
        arguments.logger.setLevel(self.log_level)
        return arguments

    def _iterate_config_class(self, klass, class_names: typing.List[str], config, out_file: io.IOBase = sys.stdout) -> None:
        class_path = ".".join(class_names)
        print(
            f"""\n# ------------------------------------------------------------------------------
# {class_path} configuration
# ------------------------------------------------------------------------------""",
            end="\n\n",
            file=out_file,
        )
        for name, tr in klass.class_own_traits().items():
            md = tr.metadata
            if md.get("config"):
                help = md.get("help", "").lstrip()
                commented_lines = "\n".join([f"# {line}" for line in help.split("\n")])
                print(f"#{commented_lines}", file=out_file)
                value = tr.default()
                print(f"#  Type: {tr.info()}", file=out_file)
                print(f"#  Default: {value!r}", file=out_file)
                if name in config:
                    cfg_value = config[name]
                    print(f"c.{class_path!s}.{name!s} = {cfg_value!r}", end="\n\n", file=out_file)
                else:
                    print(f"#  c.{class_path!s}.{name!s} = {value!r}", end="\n\n", file=out_file)

    def generate_config_file(self, file_like: io.IOBase, config=None) -> None:
        print("#", file=file_like)
        print("# Configuration file for pyargscan.", file=file_like)
        print("#", file=file_like)
        print("c = get_config()  # noqa", end="\n\n", file=file_like)

        for klass in (General, Options):
            self._iterate_config_class(
                klass, [klass.__name__], config=self.config.get(klass.__name__, {}) if config is None else config, out_file=file_like
            )


application: typing.Optional[ArgScan] = None


def create_application(argv: typing.Optional[typing.List[str]] = None) -> ArgScan:
    global application
    if application is not None:
        return application
    if argv is None:
        argv = sys.argv[1:]
    application = ArgScan()
    application.initialize(argv)
    application.start()
    return application


def get_application(argv: typing.Optional[typing.List[str]] = None) -> ArgScan:
    global application
    if application is None:
        application = create_application(argv)
    return application


def reset_application() -> None:
    global application
    del application
    application = None
    # Subcommand applications are singletons bound to their parent.
    for klass in (ProfileCreate, ProfileConvert, ProfileApp):
        klass.clear_instance()
