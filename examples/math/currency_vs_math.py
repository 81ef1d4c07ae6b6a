"""Dollar amounts stay text; formulas become MathML; bad formulas show an error."""

from awsm import Renderer

renderer = Renderer(highlight=False)

for source in [
    "The costs are $5 and $10 respectively.",
    "If $a=1$ and $b=2$, then $c=3$.",
    "$$\n\\sum_{k=1}^n k = \\frac{n(n+1)}{2}\n$$",
    "Broken: $\\frac{1$",
]:
    print(renderer(source))
