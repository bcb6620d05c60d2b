from flask import Blueprint, Flask, current_app, render_template, request
from markupsafe import Markup
from pathlib import Path

from front_matter import parse_frontmatter
from nav_tree import build_menu
from rendering import render_markdown

SELECT_FILE_HTML = '<h1>Select a file from the menu</h1>'
NOT_FOUND_HTML = '<h1>File not found</h1>'

pages = Blueprint('pages', __name__)


def resolve_document(root, requested):
    """Return the real path of `requested` inside `root`, or None.

    Both paths are canonicalized first, so `..`, absolute paths, symlinks
    pointing outside the mirror and sibling folders sharing the root's name
    prefix are all rejected.
    """
    try:
        root = Path(root).resolve()
        candidate = (root / requested).resolve()
        if candidate != root and root not in candidate.parents:
            return None
        if not candidate.is_file():
            return None
    except (OSError, ValueError, RuntimeError):
        return None
    return candidate


def render_document(root, requested):
    path = resolve_document(root, requested)
    if path is None:
        return NOT_FOUND_HTML

    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()
    except OSError:
        return NOT_FOUND_HTML

    return render_markdown(parse_frontmatter(content).body)


@pages.route('/')
def index():
    root = current_app.config['MIRROR_DIR']
    requested = request.args.get('file')

    main_content = SELECT_FILE_HTML
    if requested:
        main_content = render_document(root, requested)

    # Generate menu, unless the first clone hasn't landed yet
    menu = build_menu(root, root) if root.is_dir() else None

    return render_template('page.html', menu=menu, content=Markup(main_content))


def create_app(config):
    app = Flask(__name__)
    app.config['MIRROR_DIR'] = Path(config.mirror_dir).resolve()
    app.register_blueprint(pages)
    return app
