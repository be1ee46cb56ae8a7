"""
Top-level package for the WordPress → Jekyll export utility.

This package bundles all components required to read WordPress eXtended RSS
exports and write them as Jekyll source files.  Modules are split into
subpackages:

* :mod:`wxr2jekyll.extractors` – parsing of export documents and taxonomies
* :mod:`wxr2jekyll.parsers` – HTML inspection and body conversion
* :mod:`wxr2jekyll.writers` – identifiers, attachment names, document assembly
  and filesystem/network collaborators
* :mod:`wxr2jekyll.utils` – error types and reporting

Orchestration is handled in :mod:`wxr2jekyll.export_tool`.
"""

__version__ = "1.0.0"
