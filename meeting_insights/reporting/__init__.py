"""
Reporting helpers: ASCII terminal formatters and file exports.

  formatters.py - plain multi-line strings for ``typer.echo()``
  export.py     - JSON / CSV writers and the camelCase analytics dict
"""
