"""Sample cards and badges shipped with BriefDeck."""

from __future__ import annotations

from .badges import BadgeCatalog
from .cards import CardCatalog

SAMPLE_CARDS: tuple[dict[str, str], ...] = (
    {
        "category": "Client",
        "prompt": "Local coffee shop",
        "back": "Consider the community-focused nature of local coffee shops and how to create a cozy, inviting aesthetic.",
        "difficulty": "Beginner",
    },
    {
        "category": "Client",
        "prompt": "Tech startup",
        "back": "Tech startups often want to convey innovation and disruption. Consider modern, forward-thinking design elements.",
        "difficulty": "Intermediate",
    },
    {
        "category": "Client",
        "prompt": "Luxury fashion brand",
        "back": "Luxury brands value exclusivity and sophistication. Consider elegant typography and minimalist design.",
        "difficulty": "Advanced",
    },
    {
        "category": "Need",
        "prompt": "Logo design",
        "back": "A memorable logo communicates brand values at a glance. Consider scalability and versatility across print and digital formats.",
        "difficulty": "Beginner",
    },
    {
        "category": "Need",
        "prompt": "Poster for an event",
        "back": "Event posters need to communicate key information clearly while capturing attention. Focus on hierarchy and readability.",
        "difficulty": "Intermediate",
    },
    {
        "category": "Need",
        "prompt": "Website landing page",
        "back": "Landing pages need to convert visitors to actions. Focus on clear CTAs and compelling visuals.",
        "difficulty": "Intermediate",
    },
    {
        "category": "Challenge",
        "prompt": "Limited color palette (2 colors only)",
        "back": "Working with a limited palette can create striking, memorable designs. Consider complementary or monochromatic schemes for visual impact.",
        "difficulty": "Beginner",
    },
    {
        "category": "Challenge",
        "prompt": "Typography-focused design",
        "back": "When focusing on typography, consider font pairing, hierarchy, and how type can create visual interest without relying on images.",
        "difficulty": "Intermediate",
    },
    {
        "category": "Challenge",
        "prompt": "No stock images",
        "back": "Instead of stock photography, explore illustrations, custom photography, or creative typography solutions.",
        "difficulty": "Advanced",
    },
    {
        "category": "Audience",
        "prompt": "Gen Z trendsetters",
        "back": "Gen Z appreciates authenticity, bold aesthetics, and designs that feel current but not trying too hard. Consider vibrant colors and playful elements.",
        "difficulty": "Intermediate",
    },
    {
        "category": "Audience",
        "prompt": "Eco-conscious consumers",
        "back": "This audience prioritizes sustainability and ethical practices. Designs that feature natural elements, earthy tones, and minimal waste aesthetics typically resonate.",
        "difficulty": "Beginner",
    },
    {
        "category": "Audience",
        "prompt": "Busy professionals",
        "back": "Time-constrained professionals value clarity and efficiency. Consider clean layouts with clear hierarchy and minimal distractions.",
        "difficulty": "Intermediate",
    },
)

SAMPLE_BADGES: tuple[dict, ...] = (
    {"name": "Starting Strong", "description": "Completed 5 challenges", "icon": "lightbulb", "requirement": "challenges", "requiredCount": 5},
    {"name": "Color Theory Pro", "description": "3 color challenges", "icon": "palette", "requirement": "color_challenges", "requiredCount": 3},
    {"name": "Logo Legend", "description": "Created 3 logos", "icon": "pen-tool", "requirement": "logo_designs", "requiredCount": 3},
    {"name": "Community Builder", "description": "10+ comments given", "icon": "message-circle", "requirement": "comments", "requiredCount": 10},
    {"name": "Challenge Master", "description": "Complete 15 challenges", "icon": "award", "requirement": "challenges", "requiredCount": 15},
    {"name": "Visual Virtuoso", "description": "Get 50+ upvotes on a design", "icon": "star", "requirement": "likes", "requiredCount": 50},
)


def seed_sample_data(cards: CardCatalog, badges: BadgeCatalog) -> None:
    for entry in SAMPLE_CARDS:
        cards.create_card(entry["category"], entry["prompt"], entry["back"], entry["difficulty"])
    for entry in SAMPLE_BADGES:
        badges.create_badge(
            entry["name"],
            entry["description"],
            entry["icon"],
            entry["requirement"],
            entry["requiredCount"],
        )
