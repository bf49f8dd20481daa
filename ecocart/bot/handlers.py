import asyncio
import html
from typing import Dict, List, Optional

from aiogram import Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message

from ecocart.bot.keyboards import main_kb
from ecocart.constants import MILESTONE_POINTS
from ecocart.errors import EcoCartError
from ecocart.models import CartEntry, Item, Order
from ecocart.services.cart import CartService
from ecocart.services.rewards import crossed_milestone, summarize, total_eco_points
from ecocart.utils.formatters import money, progress_bar

router = Router()

MAX_LISTED_PRODUCTS = 20

HELP_TEXT = (
    "<b>EcoCart ♻️</b>\n"
    "/products [поиск] — каталог\n"
    "/add ID [QTY] — добавить в корзину\n"
    "/set ID QTY — задать количество (0 удаляет)\n"
    "/remove ID — убрать из корзины\n"
    "/cart — корзина и награды\n"
    "/checkout — оформить заказ"
)


def _parse_int(text: str) -> int:
    return int(text.strip())


def _args(command: CommandObject) -> List[str]:
    return (command.args or "").split()


def render_products(items: List[Item]) -> str:
    if not items:
        return "Товары не найдены."
    lines = ["<b>Каталог:</b>"]
    for it in items[:MAX_LISTED_PRODUCTS]:
        lines.append(
            f"• <code>{it.id}</code> {html.escape(it.name)} — {money(it.price)}"
            f" | 🌱 {it.score} | 🏅 {it.eco_points}"
        )
    if len(items) > MAX_LISTED_PRODUCTS:
        lines.append(f"… и ещё {len(items) - MAX_LISTED_PRODUCTS}")
    return "\n".join(lines)


def render_cart(cart: Dict[int, CartEntry]) -> str:
    if not cart:
        return "🧺 Корзина пуста. Начните с /products"

    lines = ["<b>Корзина:</b>"]
    for item_id, e in cart.items():
        lines.append(
            f"• <code>{item_id}</code> {html.escape(e.item.name)} × {e.quantity}"
            f" = {money(e.item.price * e.quantity)} (🏅 {e.item.eco_points * e.quantity})"
        )

    s = summarize(cart)
    lines.append("")
    lines.append(f"Товаров: {s['totalItems']} | Итого: <b>{money(s['totalPrice'])}</b>")
    lines.append(f"Средний эко-рейтинг: {s['averageScore']}")
    lines.append(
        f"🌱 {s['ecoPoints']} / {s['milestone']} Eco Points "
        f"{progress_bar(s['progress'])} {round(s['progress'])}%"
    )
    lines.append(f"Уровень: <b>{s['tier']['name']}</b> — {s['tier']['perk']}")
    return "\n".join(lines)


def render_order(order: Order) -> str:
    return (
        f"✅ Заказ <b>#{order.id}</b> оформлен\n"
        f"Позиций: {len(order.items)}\n"
        f"Сумма: <b>{money(order.total_amount)}</b>\n"
        f"Eco Points: {order.eco_points}"
    )


def milestone_text(before: int, after: int) -> Optional[str]:
    if crossed_milestone(before, after):
        return (
            f"🎉 <b>Hurray!</b> Вы набрали {MILESTONE_POINTS} Eco Points! "
            "Заберите награду и продолжайте в том же духе 🌱"
        )
    return None


@router.message(CommandStart())
@router.message(Command("help"))
async def cmd_start(message: Message):
    await message.answer(HELP_TEXT, reply_markup=main_kb())


@router.message(Command("products"))
async def cmd_products(message: Message, command: CommandObject, cart_service: CartService):
    search = (command.args or "").strip() or None
    try:
        items = await asyncio.to_thread(cart_service.catalog.list_items, search)
    except EcoCartError as e:
        await message.answer(f"❌ {e.message}. Попробуйте ещё раз позже.")
        return
    await message.answer(render_products(items))


@router.message(Command("add"))
async def cmd_add(message: Message, command: CommandObject, cart_service: CartService):
    args = _args(command)
    if not args:
        await message.answer("Формат: /add ID [QTY]")
        return

    try:
        item_id = _parse_int(args[0])
        qty = _parse_int(args[1]) if len(args) >= 2 else 1
    except ValueError:
        await message.answer("ID и QTY должны быть целыми числами, пример: /add 3 2")
        return

    before = total_eco_points(cart_service.snapshot())
    try:
        cart = await asyncio.to_thread(cart_service.add, item_id, qty)
    except EcoCartError as e:
        await message.answer(f"❌ {e.message}")
        return

    entry = cart[item_id]
    await message.answer(f"✅ {html.escape(entry.item.name)} × {entry.quantity}")

    celebration = milestone_text(before, total_eco_points(cart))
    if celebration:
        await message.answer(celebration)


@router.message(Command("set"))
async def cmd_set(message: Message, command: CommandObject, cart_service: CartService):
    args = _args(command)
    if len(args) != 2:
        await message.answer("Формат: /set ID QTY")
        return
    try:
        item_id, qty = _parse_int(args[0]), _parse_int(args[1])
    except ValueError:
        await message.answer("ID и QTY должны быть целыми числами")
        return

    await message.answer(render_cart(cart_service.update_quantity(item_id, qty)))


@router.message(Command("remove"))
async def cmd_remove(message: Message, command: CommandObject, cart_service: CartService):
    args = _args(command)
    if len(args) != 1:
        await message.answer("Формат: /remove ID")
        return
    try:
        item_id = _parse_int(args[0])
    except ValueError:
        await message.answer("ID должен быть целым числом")
        return

    await message.answer(render_cart(cart_service.remove(item_id)))


@router.message(Command("cart"))
async def cmd_cart(message: Message, cart_service: CartService):
    await message.answer(render_cart(cart_service.snapshot()))


@router.message(Command("checkout"))
async def cmd_checkout(message: Message, cart_service: CartService):
    order = cart_service.checkout()
    await message.answer(render_order(order), reply_markup=main_kb())
