# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the restfile API reference."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

project = "restfile"
author = "restfile Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

# Pydantic models document their fields through the class docstring.
autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {"members": True, "undoc-members": False}
napoleon_google_docstring = True
napoleon_numpy_docstring = False

master_doc = "index"
html_theme = "alabaster"
html_title = "restfile: .http and .rest request file parser"
