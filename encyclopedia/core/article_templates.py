# Starter HTML used when an article is created without content.

BASIC = """<section class="wiki-section">
  <h2>Biography</h2>
  <p></p>
</section>"""

INFOBOX = """<div class="wiki-infobox">
  <div class="infobox-title">Family information</div>
  <table class="infobox-table">
    <tr><td class="label">Born:</td><td></td></tr>
    <tr><td class="label">Died:</td><td></td></tr>
    <tr><td class="label">Occupation:</td><td></td></tr>
  </table>
</div>

<section class="wiki-section">
  <h2>Early life</h2>
  <p></p>
</section>

<section class="wiki-section">
  <h2>Career</h2>
  <p></p>
</section>"""

FULL_FEATURED = """<div class="wiki-infobox">
  <div class="infobox-title">Infobox</div>
  <table class="infobox-table">
    <tr><td class="label">Name:</td><td></td></tr>
    <tr><td class="label">Born:</td><td></td></tr>
    <tr><td class="label">Died:</td><td></td></tr>
  </table>
</div>

<section class="wiki-section">
  <h2>Early life</h2>
  <p></p>
</section>

<section class="wiki-section">
  <h2>Career</h2>
  <p></p>
</section>

<section class="wiki-section">
  <h2>Family</h2>
  <p></p>
</section>

<section class="wiki-section">
  <h2>Legacy</h2>
  <p></p>
</section>"""

TEMPLATES = {
    "basic": BASIC,
    "infobox": INFOBOX,
    "full_featured": FULL_FEATURED,
}


def default_template(template_type: str | None = None) -> str:
    return TEMPLATES.get(template_type or "basic", BASIC)
