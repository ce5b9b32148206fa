import sys, os
import sphinx_rtd_theme

# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

sys.path.insert(0, os.path.abspath('../'))

from blockconf import __author__, __title__, __version__

# -- Project information -----------------------------------------------------

project = __title__
copyright = f'2024-present {__author__}'
author = __author__
release = __version__

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx_rtd_theme',
    'sphinx.ext.autodoc',
]

autodoc_default_options = {
    'members': True,
    'exclude-members': '__init__',
}

autodoc_member_order = 'bysource'
autodoc_class_content = 'class'
autodoc_class_signature = 'separated'

# The `type` aliases in blockconf._types render poorly when expanded:
autodoc_type_aliases = {
    'ConfigKey': 'blockconf._types.ConfigKey',
    'Indent': 'blockconf._types.Indent',
    'KeyPath': 'blockconf._types.KeyPath',
    'Token': 'blockconf._types.Token',
}

templates_path = ['_templates']
exclude_patterns = ['_build']


# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_static_path = ['_static']
