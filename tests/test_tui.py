# tests/test_tui.py
import asyncio

from predictive_keyboard.tui_app import KeyboardApp


def test_typing_updates_suggestion_bar(resources, make_provider, store):
    provider = make_provider(resources)

    async def scenario():
        app = KeyboardApp(provider)
        async with app.run_test() as pilot:
            await pilot.press("t", "h")
            assert app.session.current_word == "Th"
            assert app.suggestions == ["the", "that", "thank"]
            await pilot.press("tab")
            assert app.committed == "the "
            assert app.session.current_word == ""
            await pilot.press("ctrl+s")
        return app

    app = asyncio.run(scenario())
    assert provider.overlay.word_frequency("the") == 1
    assert app.loading is False
    assert store.writes >= 1
