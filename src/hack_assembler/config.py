"""
Hack Assembler - Configuration
==============================

Assembler configuration: label policy and machine-code file naming.
Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line flags (applied on top by the CLI)
"""

from dataclasses import dataclass, replace
import os


TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for a Hack assembler run.

    Attributes:
        allow_label_redefinition: If True, a label declared twice takes the
            address of its last declaration instead of raising
            DuplicateSymbolError (default: False)
        output_suffix: Suffix of the machine-code file (default: ".hack")
    """

    allow_label_redefinition: bool = False
    output_suffix: str = ".hack"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            HACKASM_ALLOW_LABEL_REDEFINITION: "1"/"true"/"yes"/"on" to enable
            HACKASM_OUTPUT_SUFFIX: machine-code file suffix, e.g. ".bin"
        """
        config = cls()

        if redefinition := os.environ.get("HACKASM_ALLOW_LABEL_REDEFINITION"):
            config = replace(
                config,
                allow_label_redefinition=redefinition.strip().lower() in TRUE_VALUES,
            )

        if suffix := os.environ.get("HACKASM_OUTPUT_SUFFIX"):
            suffix = suffix.strip()
            if not suffix.startswith("."):
                suffix = "." + suffix
            config = replace(config, output_suffix=suffix)

        return config

    def with_overrides(self, **overrides) -> "AssemblerConfig":
        """Return a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self
