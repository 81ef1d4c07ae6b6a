"""Render Markdown with highlighted code and MathML in one call."""

from awsm import render

html = render("# Hello **World**\n\n```python\nprint('hi')\n```\n\nEnergy: $E=mc^2$.")
print(html)
