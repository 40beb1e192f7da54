"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "spec-runner.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Run configuration template for simple-spec-runner.
# Replace every <REQUIRED> placeholder before running the run command.
# Replace <OPTIONAL> placeholders only when your setup needs them.

# Suites to run, as package.module:attribute. The attribute is either a Suite
# instance or a zero-argument factory returning a fresh Suite.
suites:
  - "<REQUIRED>"

filter:
  # Run only tests carrying at least one of these tags.
  # include:
  #   - "<OPTIONAL>"
  # Skip tests carrying any of these tags.
  exclude:
    - "<OPTIONAL>"

run:
  # Run a single test by its full name, even when it is ignored.
  # test_name: "<OPTIONAL>"
  stop_on_failure: false

report:
  # Write run results to an Excel workbook.
  # workbook: "<OPTIONAL>.xlsx"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Run configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
