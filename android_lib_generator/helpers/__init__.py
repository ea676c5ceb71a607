"""Helper modules (console output, YAML files, hosted Git API)."""
