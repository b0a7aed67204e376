# Copyright 2023, QC Design GmbH and the plaquette contributors
# SPDX-License-Identifier: Apache-2.0
# Configuration file for the Sphinx documentation builder.
#
# For a full list of options see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).absolute().parent.parent / "src"))


# -- Project information -----------------------------------------------------

project = "cliffordtab"
copyright = "2023, QC Design GmbH and the plaquette contributors"
author = "QC Design GmbH"


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.doctest",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinxcontrib.bibtex",
    "sphinx_copybutton",
]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
}

autodoc_member_order = "groupwise"

# -- BiBTeX configuration --------------------------------------

bibtex_default_style = "alpha"
bibtex_bibfiles = ["references.bib"]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]


# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

nitpicky = True
nitpick_ignore_regex = [
    ("py:class", r"(numpy|stim)\..*"),
]

# Note: __init__ is excluded here because a class docstring
# should contain ".. automethod:: __init__".
autodoc_default_options = {
    "members": True,
    "special-members": True,
    "show-inheritance": None,
    "exclude-members": (
        "__annotations__,__dict__,__hash__,__init__,__match_args__,__module__,"
        "__weakref__,__getnewargs__,__new__,__repr__"
    ),
}

# copybutton customisations - exclude line-numbers, prompt characters, and outpus
copybutton_exclude = ".linenos, .gp, .go"
