#!/usr/bin/env python3
import sys
import os
import os.path as path
import datetime


### -- General options -- ###

# Make autodoc and import work.
if path.exists(path.join('..', 'tmibot')):
    sys.path.insert(0, os.path.abspath('..'))
import tmibot

# General information about the project.
project = tmibot.__name__
copyright = '{current}, tmibot contributors'.format(current=datetime.date.today().year)
version = release = tmibot.__version__

# Sphinx extensions to use.
extensions = [
    # Generate API description from code.
    'sphinx.ext.autodoc',
    # Link to Sphinx documentation for related projects.
    'sphinx.ext.intersphinx',
    # Include full source code with documentation.
    'sphinx.ext.viewcode'
]

# Documentation links for projects we link to.
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None)
}


### -- Build locations -- ###

templates_path = ['_templates']
exclude_patterns = ['_build']
source_suffix = '.rst'
master_doc = 'index'


### -- HTML output -- ##

# Only set RTD theme if we're building locally.
if os.environ.get('READTHEDOCS', None) != 'True':
    html_theme = 'sphinx_rtd_theme'
html_show_sphinx = False
htmlhelp_basename = 'tmibotdoc'


### -- Manpage output -- ###

man_pages = [
    ('index', 'tmibot', 'tmibot Documentation', ['tmibot contributors'], 1)
]


### -- Sphinx customization code -- ##

def skip(app, what, name, obj, skip, options):
    if skip:
        return True
    if name.startswith('_') and name != '__init__':
        return True
    if name in ('on_data', 'on_event', 'handle_forever'):
        return True
    return False

def setup(app):
    app.connect('autodoc-skip-member', skip)
