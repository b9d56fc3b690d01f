# storefront/pages.py
from html import escape
from typing import List

from .cart import Cart
from .core import format_ars
from .models import Product

# Server-rendered catalog and cart pages. Buttons post to the JSON API.

_LAYOUT = """<!doctype html>
<html lang="es">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body data-page="{page}">
<header>
<a href="/">Catálogo</a>
<a href="/carrito">Carrito (<span id="cart-badge">{badge}</span>)</a>
</header>
<main>
{body}
</main>
<script>
async function post(url, body) {{
  const res = await fetch(url, {{method: "POST", headers: {{"Content-Type": "application/json"}}, body: JSON.stringify(body || {{}})}});
  const data = await res.json();
  if (!res.ok) alert(data.detail);
  else if (data.message) alert(data.message);
  location.reload();
}}
</script>
</body>
</html>
"""

_ADD_PRODUCT_FORM = (
    "<form id=\"form-agregar-producto\" onsubmit=\"event.preventDefault(); "
    "post('/products', {code: this.codigo.value, name: this.nombre.value, price: Number(this.precio.value)});\">"
    "<input name=\"nombre\" placeholder=\"Ej: Webcam\" required>"
    "<input name=\"precio\" type=\"number\" min=\"1\" placeholder=\"Ej: 50000\" required>"
    "<input name=\"codigo\" placeholder=\"Ej: W1\" required>"
    "<button id=\"btn-agregar-producto\" class=\"btn\" type=\"submit\">Agregar producto</button>"
    "</form>"
)


def _page(title: str, page: str, badge: int, body: str) -> str:
    return _LAYOUT.format(title=escape(title), page=page, badge=badge, body=body)


def render_catalog(products: List[Product], badge: int) -> str:
    cards = []
    for p in products:
        code = escape(p.code)
        cards.append(
            '<div class="item">'
            f"<h3>{escape(p.name)}</h3>"
            f'<div class="code">Código: {code}</div>'
            f'<div class="price">{format_ars(p.price)}</div>'
            f"<button class=\"btn\" onclick='post(\"/cart/add\", {{code: {_js(p.code)}, quantity: 1}})'>Agregar al carrito</button>"
            "</div>"
        )
    body = '<div id="product-list">' + "".join(cards) + "</div>" + _ADD_PRODUCT_FORM
    return _page("Catálogo", "catalogo", badge, body)


def render_cart(cart: Cart) -> str:
    rows = []
    for line, p in cart.entries():
        code = _js(line.code)
        rows.append(
            '<div class="cart-row">'
            f'<div class="name">{escape(p.name)}</div>'
            f'<div class="code">Código: {escape(p.code)}</div>'
            '<div class="counter">'
            f"<button onclick='post(\"/cart/set\", {{code: {code}, quantity: {line.quantity - 1}}})'>−</button>"
            f"<div>{line.quantity}</div>"
            f"<button onclick='post(\"/cart/set\", {{code: {code}, quantity: {line.quantity + 1}}})'>+</button>"
            "</div>"
            f'<div class="price">{format_ars(p.price * line.quantity)}</div>'
            "</div>"
        )
    if not rows:
        rows.append('<div class="hint">Tu carrito está vacío.</div>')

    body = (
        '<div id="cart-list">' + "".join(rows) + "</div>"
        '<div class="cart-summary">'
        f'Total: <span id="cart-total">{format_ars(cart.total())}</span>'
        "<button id=\"btn-vaciar\" onclick='if (confirm(\"¿Vaciar el carrito?\")) post(\"/cart/clear\")'>Vaciar carrito</button>"
        "<button class=\"btn secondary\" onclick='post(\"/cart/checkout\")'>Finalizar compra</button>"
        "</div>"
    )
    return _page("Carrito", "carrito", cart.item_count(), body)


def _js(value: str) -> str:
    # string literal safe inside a single-quoted HTML attribute
    return '"' + escape(value.replace("\\", "\\\\").replace('"', '\\"'), quote=True) + '"'
