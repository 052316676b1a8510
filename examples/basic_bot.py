"""Example BriefDeck bot with a JSON catalog, admin commands and a simulation run."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from briefdeck import BriefApp, BriefDeckConfig
from briefdeck.diagnostics.draw_simulator import DrawSimulator
from briefdeck.loaders import load_catalog_from_json


def register(app: BriefApp) -> None:
    """Register cards and badges, plus one extra prompt added in code."""
    catalog_path = Path(__file__).with_name("catalog") / "cards.json"
    load_catalog_from_json(app, catalog_path)

    app.cards.prompt(
        "Challenge",
        "Only recycled paper textures",
        "Pair the texture with a restrained palette so it does not overwhelm.",
        "Intermediate",
    )

    # Custom admin command name.
    app.config.admin.commands.grant_points = "givexp"


def simulate() -> None:
    app = BriefApp(BriefDeckConfig.from_env())
    register(app)
    result = DrawSimulator(app).simulate(draws=200)
    print(f"Complete briefs: {result.complete_briefs}, unchanged rerolls: {result.unchanged_rerolls}")


async def run_bot() -> None:
    from aiogram import Bot, Dispatcher

    from briefdeck.admin import build_admin_router
    from briefdeck.telegram import build_router

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = BriefApp(BriefDeckConfig.from_env())
    register(app)
    await app.init_backend()

    bot = Bot(app.config.bot_token)
    dp = Dispatcher()
    dp.include_router(build_admin_router(app))
    dp.include_router(build_router(app))
    try:
        await dp.start_polling(bot)
    finally:
        await app.close()


if __name__ == "__main__":
    asyncio.run(run_bot())
