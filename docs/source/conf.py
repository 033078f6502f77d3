import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

project = 'dupdecl'
copyright = '2026, dupdecl contributors'
author = 'dupdecl contributors'
release = '0.3.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_rtd_theme',
]

templates_path = ['_templates']
exclude_patterns = []

autodoc_member_order = 'bysource'

html_theme = 'sphinx_rtd_theme'
html_static_path = []
