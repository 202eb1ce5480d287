from dataclasses import dataclass


@dataclass(frozen=True)
class Resource:
    key: str
    title: str
    description: str
    kind: str  # article, tool, guide
    link: str | None = None
    internal_link: str | None = None

    @property
    def href(self) -> str:
        return self.internal_link or self.link or "#"


RESOURCES = {
    "formatting-basics": Resource(
        key="formatting-basics",
        title="Mastering Manuscript Formatting: A Beginner's Guide",
        description="Learn the fundamental principles of formatting your manuscript for both ebook and print to ensure a professional presentation.",
        kind="guide",
        internal_link="/resources/formatting-basics",
    ),
    "cover-design-tips": Resource(
        key="cover-design-tips",
        title="10 Tips for a Cover That Sells Books",
        description="Your cover is the first thing readers see. Discover key design principles and common pitfalls to avoid.",
        kind="article",
        internal_link="/resources/cover-design-tips",
    ),
    "understanding-isbn": Resource(
        key="understanding-isbn",
        title="ISBNs Explained: Do You Need One and How to Get It?",
        description="Navigate the world of ISBNs. Understand their purpose, when they are required, and your options for obtaining them.",
        kind="guide",
        internal_link="/resources/understanding-isbn",
    ),
    "keyword-research-tools": Resource(
        key="keyword-research-tools",
        title="Top 5 Free Keyword Research Tools for Authors",
        description="Boost your book's discoverability by finding the right keywords. Explore these free tools to get started.",
        kind="tool",
        link="#",
    ),
    "self-publishing-checklist": Resource(
        key="self-publishing-checklist",
        title="The Ultimate Self-Publishing Checklist",
        description="From manuscript to market, ensure you haven't missed any crucial steps with our comprehensive checklist.",
        kind="guide",
        internal_link="/resources/self-publishing-checklist",
    ),
}
