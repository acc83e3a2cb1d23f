"""
Basic usage example for md2slides.

This example shows how to turn a markdown deck into slide JSON
using the Python API.
"""

import json

from md2slides import SlideExtractionPipeline

DECK = """\
# Quarterly review
## Engineering

<!-- Start with the **good news** -->

---

# Highlights

* Shipped H<sub>2</sub>O :rocket:
* <span style="color: #1a73e8">On time</span>

{.column}

![](https://example.com/chart.png)
@[youtube](dQw4w9WgXcQ)

---

![](https://example.com/cover.jpg){.background}

Metric | Q1 | Q2
---|---|---
Users | 10 | 20
"""


def main():
    pipeline = SlideExtractionPipeline(debug=True)

    slides = pipeline.extract(DECK)

    print("\n✓ Extraction complete!")
    print(json.dumps([slide.to_dict() for slide in slides], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
