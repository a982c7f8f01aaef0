from enum import Enum
from os.path import abspath, dirname, isdir, isfile, join
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ROOT_DIR = abspath(join(dirname(__file__), ".."))

# Raw column types with a known counterpart in the generated schema
DEFAULT_TYPE_MAP = {
    "text": ":string",
    "citext": ":string",
    "timestamptz": ":utc_datetime",
    "uuid": "Ecto.UUID",
    "jsonb": "EctoJSON",
    "bool": ":boolean",
    "int4": ":integer",
}
DEFAULT_UNSUPPORTED_TYPE_PATTERN = r"(vector)$"
DEFAULT_SCHEMA_TEMPLATE = "ecto_schema.ex"


class _StrictModel(BaseModel):
    """
    Pydantic parser configuration options.
    """

    model_config = ConfigDict(
        extra="forbid",
    )


class DeclarationKind(str, Enum):
    """
    Supported declaration kinds.
    """

    FIELD = "field"
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    MANY_TO_MANY = "many_to_many"


class TypeMapConfig(_StrictModel):
    """
    Mapping of raw column types to generated field types.
    """

    mapping: dict[str, str] = Field(
        DEFAULT_TYPE_MAP,
        description="Raw column type to generated type; unknown types are passed through unchanged",
    )
    unsupported_pattern: str = Field(
        DEFAULT_UNSUPPORTED_TYPE_PATTERN,
        description="Regular expression matching raw types that can't be generated",
    )


class RenderConfig(_StrictModel):
    """
    Declaration syntax of the target ORM.

    Keywords are used as the first word of each declaration line, option
    labels name the keyword arguments appended after the target.
    """

    keywords: dict[DeclarationKind, str] = Field(
        default={
            DeclarationKind.FIELD: "field",
            DeclarationKind.BELONGS_TO: "belongs_to",
            DeclarationKind.HAS_MANY: "has_many",
            DeclarationKind.HAS_ONE: "has_one",
            DeclarationKind.MANY_TO_MANY: "many_to_many",
        },
        description="Declaration keyword for each declaration kind",
    )
    option_labels: dict[str, str] = Field(
        default={
            "values": "values",
            "fk": "foreign_key",
            "ref": "references",
            "join_through": "join_through",
            "join_keys": "join_keys",
        },
        description="Keyword argument name for each declaration option",
    )
    template_paths: list[str] = Field(
        [join(ROOT_DIR, "templates", "tree")],
        description="List of directories to search for schema templates",
    )
    schema_template: str = Field(
        DEFAULT_SCHEMA_TEMPLATE,
        description="Template used to render one entity; also the extension of generated files",
    )

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: dict[DeclarationKind, str]) -> dict[DeclarationKind, str]:
        missing = set(DeclarationKind) - set(v)
        if missing:
            raise ValueError(f"Missing declaration keywords: {', '.join(sorted(k.value for k in missing))}")
        return v

    @field_validator("option_labels")
    @classmethod
    def validate_option_labels(cls, v: dict[str, str]) -> dict[str, str]:
        known = {"values", "fk", "ref", "join_through", "join_keys"}
        if set(v) != known:
            raise ValueError(f"Option labels must be defined for exactly: {', '.join(sorted(known))}")
        return v

    @field_validator("template_paths")
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        for path in v:
            if not isdir(path):
                raise ValueError(f"Invalid template path: {path}")
        return v

    @model_validator(mode="after")
    def validate_schema_template(self) -> "RenderConfig":
        if not any(isfile(join(path, self.schema_template)) for path in self.template_paths):
            raise ValueError(f"Schema template {self.schema_template} not found in template paths")
        return self


class LogConfig(_StrictModel):
    """
    Configuration for logging.
    """

    level: str = Field(
        "INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    format: str = Field(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        description="Logging format",
    )
    output: Optional[str] = Field(
        None,
        description="Output file for logs (if not specified, logs are printed to stderr)",
    )


class Config(_StrictModel):
    """
    ormgen configuration
    """

    types: TypeMapConfig = TypeMapConfig()
    render: RenderConfig = RenderConfig()
    log: LogConfig = LogConfig()


class ConfigLoader:
    """
    Configuration loader takes care of loading and parsing configuration files.

    The default loader is already initialized as `ormgen.config.loader`. To
    load the configuration from a file, use `ormgen.config.loader.load(path)`.

    To get the current configuration, use `ormgen.config.get_config()`.
    """

    config: Config
    config_path: Optional[str]

    def __init__(self):
        self.config_path = None
        self.config = Config()

    @staticmethod
    def _remove_json_comments(json_str: str) -> str:
        """
        Remove comments from a JSON string.

        Removes all lines that start with "//" from the JSON string.

        :param json_str: JSON string with comments.
        :return: JSON string without comments.
        """
        return "\n".join([line for line in json_str.splitlines() if not line.strip().startswith("//")])

    @classmethod
    def from_json(cls: "ConfigLoader", config: str) -> Config:
        """
        Parse JSON Into a Config object.

        :param config: JSON string to parse.
        :return: Config object.
        """
        return Config.model_validate_json(cls._remove_json_comments(config), strict=True)

    def load(self, path: str) -> Config:
        """
        Load a configuration from a file.

        :param path: Path to the configuration file.
        :return: Config object.
        """
        with open(path, "rb") as f:
            raw_config = f.read()

        if b"\x00" in raw_config:
            encoding = "utf-16"
        else:
            encoding = "utf-8"

        text_config = raw_config.decode(encoding)
        self.config = self.from_json(text_config)
        self.config_path = path
        return self.config


loader = ConfigLoader()


def get_config() -> Config:
    """
    Return current configuration.

    :return: Current configuration object.
    """
    return loader.config


__all__ = ["loader", "get_config"]
