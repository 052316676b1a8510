from briefdeck import BriefApp, BriefDeckConfig
from briefdeck.config import ProgressConfig
from briefdeck.validators import validate_app


def test_validate_app_success_with_sample_data():
    app = BriefApp(BriefDeckConfig(bot_token="test", seed_sample_data=True))
    assert validate_app(app) == []


def test_validate_app_detects_missing_categories_and_duplicates():
    app = BriefApp(BriefDeckConfig(bot_token="test"))
    app.cards.prompt("Client", "Bakery").prompt("Client", "bakery")
    issues = validate_app(app)
    assert "No cards registered in category 'Need'." in issues
    assert "Category 'Client' repeats prompt 'bakery'." in issues


def test_validate_app_checks_progress_config():
    config = BriefDeckConfig(
        bot_token="test",
        seed_sample_data=True,
        progress=ProgressConfig(cancel_penalty=-1, timer_presets=(30, 2000)),
    )
    issues = validate_app(BriefApp(config))
    assert "Progress configuration 'cancel_penalty' cannot be negative." in issues
    assert any("Timer preset 2000" in issue for issue in issues)


def test_validate_app_detects_duplicate_badge_names():
    app = BriefApp(BriefDeckConfig(bot_token="test", seed_sample_data=True))
    app.badges.requirement("Logo Legend", "logo_designs", 10)
    assert "Badge name 'Logo Legend' is used more than once." in validate_app(app)
