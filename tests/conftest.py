from __future__ import annotations

import pytest

GOOD_PAGE = """<!doctype html>
<html lang="en">
<head>
  <title>Acme Widgets</title>
  <meta name="description" content="Widgets for every workshop.">
  <link rel="canonical" href="https://acme.example/">
  <link rel="preload" href="/fonts/inter.woff2" as="font">
  <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Organization", "name": "Acme"}</script>
</head>
<body>
  <header><nav><a href="/">Home</a></nav></header>
  <main>
    <section itemscope itemtype="https://schema.org/Product">
      <h1 itemprop="name">Widget</h1>
      <img src="/widget.png" alt="A blue widget">
    </section>
  </main>
  <footer>Acme Inc.</footer>
</body>
</html>
"""


@pytest.fixture
def good_page() -> str:
    return GOOD_PAGE
