# cli.py
import os
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Dict, Any, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk.catalogclient import CatalogClient

console = Console()
c = CatalogClient(base_url=os.environ.get("CATALOG_API_URL", "http://127.0.0.1:8085"))


status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Response helpers
# ---------------------------
def _unwrap_resp(resp: Any) -> Any:
    """
    If resp is a requests/httpx Response, decode its JSON body; else return as-is.
    """
    if resp is None:
        return None
    if hasattr(resp, "status_code"):
        try:
            return resp.json()
        except ValueError:
            return {"message": f"HTTP {resp.status_code}: {resp.text}"}
    return resp


def describe_update_response(resp: Any) -> Tuple[bool, str]:
    """Turn a PATCH response into (succeeded, text to show)."""
    body = _unwrap_resp(resp)
    status = getattr(resp, "status_code", 200)
    if status == 200 and isinstance(body, dict) and body.get("success"):
        product = body.get("product") or {}
        return True, f"{body.get('message')}: {product.get('name')} @ ${product.get('price')}"
    if isinstance(body, dict) and "message" in body:
        return False, f"HTTP {status}: {body['message']}"
    if isinstance(body, dict):
        # field -> [messages]
        lines = [f"{field}: {'; '.join(msgs)}" for field, msgs in body.items()]
        return False, f"HTTP {status}: " + " | ".join(lines)
    return False, f"HTTP {status}: {body}"


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Product Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Category", justify="center", width=10)

    for p in products:
        table.add_row(
            str(p.get("id", "")),
            str(p.get("name", "")),
            f"${float(p.get('price', 0)):.2f}",
            str(p.get("categoryId", "")),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Returns None on a transport error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []

    names = [p.get("name", "") for p in product_cache]
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def resolve_product_id(entry: str, products: List[Dict[str, Any]]) -> Optional[int]:
    """Accept either a numeric id or an exact (case-insensitive) product name."""
    entry = entry.strip()
    if entry.lstrip("-").isdigit():
        return int(entry)
    for p in products:
        if str(p.get("name", "")).lower() == entry.lower():
            return int(p["id"])
    return None


# ---------------------------
# Layout and input
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog SDK",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def parse_optional_decimal(raw: str) -> Optional[Decimal]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"not a number: {raw!r}")


def parse_optional_category(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        category_id = int(raw)
    except ValueError:
        raise ValueError(f"not a category id: {raw!r}")
    if category_id <= 0:
        raise ValueError(f"category id must be positive: {raw!r}")
    return category_id


def ask_optional_category(message: str) -> Optional[int]:
    while True:
        raw = Prompt.ask(f"{message} [dim](blank for any)[/dim]", default="", show_default=False)
        try:
            return parse_optional_category(raw)
        except ValueError:
            console.print("[red]Please enter a positive whole number.[/red]")


def ask_optional_decimal(message: str) -> Optional[Decimal]:
    while True:
        raw = Prompt.ask(f"{message} [dim](blank to skip)[/dim]", default="", show_default=False)
        try:
            return parse_optional_decimal(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products"),
            ("2", "🔍 Filter products"),
            ("3", "✏️ Update product"),
            ("q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            name = prompt_with_autocomplete("Name contains (blank for any)", completer=get_product_completer())
            category = ask_optional_category("Category ID")
            min_price = ask_optional_decimal("Minimum price")
            max_price = ask_optional_decimal("Maximum price")
            res = try_api(
                c.filter_products,
                name=name or None,
                category_id=category,
                min_price=min_price,
                max_price=max_price,
                success_msg="Filter applied",
            )
            if res is not None:
                show_products(res)

        elif choice == "3":
            entry = prompt_with_autocomplete("Product ID or name", completer=get_product_completer())
            pid = resolve_product_id(entry, product_cache)
            if pid is None:
                console.print(show_status(f"Unknown product: {entry}", False))
                continue
            new_name = Prompt.ask("New name [dim](blank to keep)[/dim]", default="", show_default=False)
            new_price = ask_optional_decimal("New price")
            resp = try_api(c.update_product, pid, name=new_name or None, price=new_price)
            if resp is None:
                continue
            ok, text = describe_update_response(resp)
            status_message = text if ok else f"Error: {text}"
            console.print(Panel.fit(text, title="✅ Updated" if ok else "❌ Update Failed"))
            if ok:
                product_cache = try_api(c.list_products) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
