from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from expandvars import ExpandvarsException, expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator

from checkchain.assertions import (
    Assertion,
    MergePolicy,
    command_fails,
    command_succeeds,
    env_set,
    file_contains,
    file_exists,
)
from checkchain.suite import AssertionBatch


def _expand(value: str) -> str:
    """Expand ``${VAR}`` references, failing on variables that are unset.

    A literal ``$`` is written as ``\\$``.
    """
    try:
        return expandvars(value, nounset=True)
    except ExpandvarsException as e:
        raise ValueError(f"cannot expand '{value}': {e}") from e


class FileExistsCheck(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file_exists: str
    message: str | None = None

    @field_validator("file_exists")
    @classmethod
    def expand_path(cls, v: str) -> str:
        return _expand(v)


class FileContainsSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    pattern: str

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        return _expand(v)


class FileContainsCheck(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file_contains: FileContainsSpec
    message: str | None = None


class CommandSucceedsCheck(BaseModel):
    model_config = ConfigDict(extra="forbid")
    command_succeeds: str
    timeout: int = Field(default=60, gt=0)
    message: str | None = None

    @field_validator("command_succeeds")
    @classmethod
    def expand_command(cls, v: str) -> str:
        return _expand(v)


class CommandFailsCheck(BaseModel):
    model_config = ConfigDict(extra="forbid")
    command_fails: str
    timeout: int = Field(default=60, gt=0)
    message: str | None = None

    @field_validator("command_fails")
    @classmethod
    def expand_command(cls, v: str) -> str:
        return _expand(v)


class EnvSetCheck(BaseModel):
    model_config = ConfigDict(extra="forbid")
    env_set: str
    message: str | None = None


class _GroupBase(BaseModel):
    model_config = ConfigDict(extra="forbid")
    merge: MergePolicy = MergePolicy.REPLACE
    message: str | None = None

    @field_validator("merge", mode="before")
    @classmethod
    def accept_policy_names(cls, v: Any) -> Any:
        # Also accept member names such as "RETAIN_ORIGINAL" or "concat"
        if isinstance(v, str) and v.upper() in MergePolicy.__members__:
            return MergePolicy.__members__[v.upper()]
        return v


class AllOfGroup(_GroupBase):
    all_of: list[Check] = Field(min_length=2)

    @property
    def children(self) -> list[Check]:
        return self.all_of


class AnyOfGroup(_GroupBase):
    any_of: list[Check] = Field(min_length=2)

    @property
    def children(self) -> list[Check]:
        return self.any_of


Check = (
    FileExistsCheck
    | FileContainsCheck
    | CommandSucceedsCheck
    | CommandFailsCheck
    | EnvSetCheck
    | AllOfGroup
    | AnyOfGroup
)

AllOfGroup.model_rebuild()
AnyOfGroup.model_rebuild()


class SuiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    workdir: str = "."
    assertions: list[Check]

    @field_validator("workdir")
    @classmethod
    def expand_workdir(cls, v: str) -> str:
        return _expand(v)

    @field_validator("assertions")
    @classmethod
    def assertions_must_not_be_empty(cls, v: list[Check]) -> list[Check]:
        if not v:
            raise ValueError("assertions must not be empty")
        return v


def load_config(path: Path) -> SuiteConfig:
    """Load and validate a suite config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a YAML mapping")

    config = SuiteConfig(**raw)

    # Resolve a relative workdir relative to the config file location
    workdir_path = Path(config.workdir)
    if not workdir_path.is_absolute():
        config.workdir = str((config_dir / workdir_path).resolve())

    return config


def build_assertion(check: Check, workdir: str | Path = ".") -> Assertion:
    """Turn one validated config entry into an Assertion."""
    if isinstance(check, FileExistsCheck):
        return file_exists(check.file_exists, workdir, message=check.message)
    if isinstance(check, FileContainsCheck):
        spec = check.file_contains
        return file_contains(spec.path, spec.pattern, workdir, message=check.message)
    if isinstance(check, CommandSucceedsCheck):
        return command_succeeds(
            check.command_succeeds, workdir, timeout=check.timeout, message=check.message
        )
    if isinstance(check, CommandFailsCheck):
        return command_fails(
            check.command_fails, workdir, timeout=check.timeout, message=check.message
        )
    if isinstance(check, EnvSetCheck):
        return env_set(check.env_set, message=check.message)
    if isinstance(check, (AllOfGroup, AnyOfGroup)):
        children = [build_assertion(child, workdir) for child in check.children]
        combined = children[0]
        for child in children[1:]:
            if isinstance(check, AllOfGroup):
                combined = combined.and_(child, merge=check.merge)
            else:
                combined = combined.or_(child, merge=check.merge)
        if check.message is not None:
            combined = combined.with_message(check.message)
        return combined
    raise ValueError(f"Unknown check type: '{type(check).__name__}'")


def build_batch(config: SuiteConfig) -> AssertionBatch:
    """Build the assertions of ``config`` in file order."""
    return AssertionBatch(
        build_assertion(check, config.workdir) for check in config.assertions
    )
