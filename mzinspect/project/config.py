"""Types for the optional mzinspect configuration file"""

from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, ValidationError
import ruamel.yaml
from ruamel.yaml.error import YAMLError

from mzinspect.formats.mz import DEFAULT_CODE_WINDOW
from .error import InvalidMZInspectConfigException, MZInspectConfigException


_yaml = ruamel.yaml.YAML()


class YmlFileModel(BaseModel):
    # An empty document loads as None.
    @classmethod
    def from_file(cls, filename: Path):
        with filename.open("r") as f:
            return cls.model_validate(_yaml.load(f) or {})

    @classmethod
    def from_str(cls, yaml: str):
        return cls.model_validate(_yaml.load(yaml) or {})


class ConfigFile(YmlFileModel):
    """File schema for mzinspect.yml"""

    code_window: int = Field(
        default=DEFAULT_CODE_WINDOW,
        ge=0,
        validation_alias=AliasChoices("code-window", "code_window"),
    )


def load_config(filename: Path | None) -> ConfigFile:
    """Read the configuration file, or use the defaults if there is none."""
    if filename is None:
        return ConfigFile()

    try:
        return ConfigFile.from_file(filename)
    except OSError as e:
        raise MZInspectConfigException(
            f"Cannot read config file '{filename}': {e.strerror}"
        ) from e
    except (YAMLError, ValidationError, UnicodeDecodeError) as e:
        raise InvalidMZInspectConfigException(
            f"Invalid config file '{filename}': {e}"
        ) from e
