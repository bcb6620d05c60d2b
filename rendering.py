import markdown

MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']


def render_markdown(body):
    # Convert markdown to HTML
    return markdown.markdown(body, extensions=MARKDOWN_EXTENSIONS)
