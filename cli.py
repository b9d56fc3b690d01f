# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.client import StoreClient
from storefront.config import load_settings
import requests

console = Console()
c = StoreClient(base_url=load_settings().api_url)


# Global state for status messages and caching
status_message = "Listo"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No hay productos[/italic yellow]")
        return

    table = Table(
        title="📦 Catálogo",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("Código", style="dim", width=10)
    table.add_column("Nombre", style="bold", width=24)
    table.add_column("Precio", justify="right", width=14)

    for p in products:
        table.add_row(p.get("code", "N/A"), p.get("name", "N/A"), p.get("price_display", "-"))
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]Sin datos del carrito[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Carrito", style="bold")
    title.append(f" ({cart.get('item_count', 0)} items)", style="bold cyan")
    title.append(f" - Total: {cart.get('total_display', '$0')}", style="bold green")

    items = cart.get("items", [])
    if not items:
        console.print(Panel("Tu carrito está vacío. 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Producto", style="bold", width=24)
    table.add_column("Código", style="dim", width=10)
    table.add_column("Cant.", justify="right", width=8)
    table.add_column("Precio", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    for it in items:
        product = it.get("product") or {}
        table.add_row(
            product.get("name", "?"),
            product.get("code", "?"),
            str(it.get("quantity", 0)),
            product.get("price_display", "-"),
            it.get("subtotal_display", "-"),
        )

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Estado")


def _error_detail(e: Exception) -> str:
    # API errors carry {"detail": ...}; show that instead of the raw HTTP error
    if isinstance(e, requests.HTTPError) and e.response is not None:
        try:
            return str(e.response.json().get("detail", e))
        except ValueError:
            return str(e)
    return str(e)


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and returns its result.
    On failure prints the error as a status panel and returns None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Procesando...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {_error_detail(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []

    words = [p.get("code", "") for p in product_cache] + [p.get("name", "") for p in product_cache]
    return WordCompleter([w for w in words if w], ignore_case=True)


def _resolve_code(entry: str) -> str:
    # accept a product name from the completer as well as a code
    for p in product_cache:
        if p.get("name", "").lower() == entry.lower():
            return p.get("code", entry)
    return entry


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Catálogo y carrito[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 50000.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Ingresá un número válido.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        badge = try_api(c.cart_count)

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 Ver catálogo", "5", f"🛒 Ver carrito ({badge if badge is not None else '?'})"),
            ("2", "➕ Agregar producto", "6", "✅ Finalizar compra"),
            ("3", "🛒 Agregar al carrito", "7", "🗑️ Vaciar carrito"),
            ("4", "✏️ Cambiar cantidad", "8", "🔄 Reiniciar tienda"),
            ("", "", "q", "👋 Salir")
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menú", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nElegí una opción",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Catálogo cargado")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            name = prompt_with_autocomplete("Nombre del producto")
            price = ask_float("💰 Precio (ARS)")
            code = prompt_with_autocomplete("Código único")
            resp = try_api(c.add_product, code, name, price, success_msg="Producto agregado ✅")
            if resp:
                product_cache = try_api(c.list_products) or []

        elif choice == "3":
            code = _resolve_code(prompt_with_autocomplete("Código del producto", completer=get_product_completer()))
            qty = IntPrompt.ask("Cantidad", default=1)
            resp = try_api(c.add_to_cart, code, qty, success_msg="✔️ Producto agregado al carrito")
            if resp:
                show_cart(resp)

        elif choice == "4":
            code = _resolve_code(prompt_with_autocomplete("Código del producto", completer=get_product_completer()))
            qty = IntPrompt.ask("Nueva cantidad (0 lo quita)", default=1)
            resp = try_api(c.set_quantity, code, qty, success_msg=f"Cantidad de {code} actualizada")
            if resp:
                show_cart(resp)

        elif choice == "5":
            resp = try_api(c.view_cart, success_msg="Carrito cargado")
            if resp:
                show_cart(resp)

        elif choice == "6":
            resp = try_api(c.checkout)
            if not resp:
                continue
            if resp.get("status") == "completed":
                status_message = resp.get("message", "Compra realizada")
                console.print(Panel.fit(
                    f"[green]{resp.get('message')}[/green]\n"
                    f"Items: [bold]{resp.get('item_count', 0)}[/bold]",
                    title="✅ Compra confirmada"
                ))
            else:
                status_message = f"Error: {resp.get('detail', resp)}"
                console.print(Panel.fit(f"[red]{resp.get('detail', resp)}[/red]", title="❌ Compra fallida"))

        elif choice == "7":
            if Confirm.ask("¿Vaciar el carrito?"):
                resp = try_api(c.clear_cart, success_msg="Carrito vaciado")
                if resp:
                    show_cart(resp)

        elif choice == "8":
            if Confirm.ask("[red]Se borrarán el carrito y los productos agregados. ¿Continuar?[/red]"):
                resp = try_api(c.reset, success_msg="Tienda reiniciada")
                console.print(resp)
                product_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("¿Seguro que querés salir?"):
                console.print(Panel.fit("[bold green]¡Gracias por tu compra! 👋[/bold green]", title="Chau"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrumpido por el usuario[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Error inesperado: {e}[/bold red]")
        sys.exit(1)
