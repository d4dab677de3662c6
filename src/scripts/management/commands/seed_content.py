"""Seed demo wiki pages (with revisions) and news articles."""

from django.core.management.base import BaseCommand
from django.db import transaction

from authentication.services import SessionUser
from news.models import NewsArticle
from news.services import NewsService
from wiki.models import WikiPage, WikiRevision
from wiki.services import WikiService

SEED_EDITOR = SessionUser(uid="seed-content", display_name="Site Editor")

WIKI_PAGES = [
    {
        "slug": "vice-city-beach",
        "title": "Vice City Beach",
        "description": "The sunny coastal strip on the east side of Vice City.",
        "content": "# Vice City Beach\n\nA stretch of hotels, bars and boardwalks along the Atlantic coast.",
        "category": "locations",
        "subcategory": "Vice City",
        "tags": ["beach", "vice city", "landmark"],
        "featured": True,
    },
    {
        "slug": "lucia",
        "title": "Lucia",
        "description": "One of the two playable protagonists.",
        "content": "# Lucia\n\nLucia is a protagonist introduced in the first trailer.",
        "category": "characters",
        "subcategory": "Protagonists",
        "tags": ["protagonist", "lucia"],
        "featured": True,
    },
    {
        "slug": "wanted-system",
        "title": "Wanted System",
        "description": "How police attention escalates and fades.",
        "content": "# Wanted System\n\nCrimes witnessed by police raise your wanted level.",
        "category": "gameplay-mechanics",
        "subcategory": "Wanted System",
        "tags": ["police", "mechanics"],
    },
]

NEWS_ARTICLES = [
    {
        "slug": "rockstar-confirms-two-protagonists",
        "title": "Rockstar Confirms Two Playable Protagonists",
        "excerpt": "The game will feature two playable protagonists, Lucia and Jason.",
        "content": "# Two Protagonists\n\nPlayers will be able to switch between Lucia and Jason.",
        "category": "news",
        "author": "Mike Johnson",
        "featured": True,
    },
    {
        "slug": "vice-city-map-analysis",
        "title": "Vice City Map Analysis",
        "excerpt": "What the trailers tell us about the size of the map.",
        "content": "# Map Analysis\n\nLandmarks spotted in the trailer suggest a large, varied map.",
        "category": "features",
        "author": "Sarah Williams",
    },
    {
        "slug": "beginners-guide-to-leonida",
        "title": "Beginner's Guide to Leonida",
        "excerpt": "Everything new players should know before heading out.",
        "content": "# Beginner's Guide\n\nStart by exploring the beach and getting a feel for the city.",
        "category": "guides",
        "author": "Alex Rodriguez",
    },
]


def seed_wiki_pages(pages=WIKI_PAGES) -> int:
    """Create missing wiki pages through WikiService so each gets revision 1."""
    created = 0
    for data in pages:
        if WikiPage.objects.filter(slug=data["slug"]).exists():
            continue
        WikiService.create_page(data, editor=SEED_EDITOR)
        created += 1
    return created


def seed_news_articles(articles=NEWS_ARTICLES) -> int:
    created = 0
    for data in articles:
        if NewsArticle.objects.filter(slug=data["slug"]).exists():
            continue
        NewsService.create_article(data, editor=SEED_EDITOR)
        created += 1
    return created


class Command(BaseCommand):
    """Management command to load demo content."""

    help = (
        "Seed demo wiki pages and news articles. Existing slugs are left alone. "
        "Use --reset to remove previously seeded content first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the seeded pages (and their revisions) and articles before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_content()

        self.stdout.write("Seeding content...")
        pages = seed_wiki_pages()
        articles = seed_news_articles()
        self.stdout.write(self.style.SUCCESS(f"Seed completed: {pages} wiki page(s), {articles} news article(s)."))

    @transaction.atomic
    def _reset_seeded_content(self) -> None:
        """Remove only the records this command creates, matched by slug."""
        self.stdout.write("Resetting previously seeded content...")
        slugs = [page["slug"] for page in WIKI_PAGES]
        # Revisions protect their page, so they go first.
        WikiRevision.objects.filter(page__slug__in=slugs).delete()
        WikiPage.objects.filter(slug__in=slugs).delete()
        NewsArticle.objects.filter(slug__in=[article["slug"] for article in NEWS_ARTICLES]).delete()
        self.stdout.write(self.style.WARNING("Seeded content cleared."))
