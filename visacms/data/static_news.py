"""Bundled news articles served when the live collection is unavailable or short."""

from typing import Dict, List

STATIC_NEWS: List[Dict[str, str]] = [
    {
        "title": "Canada Express Entry Draw Invites 5,000 Candidates",
        "summary": "The latest all-program draw lowered the CRS cut-off, opening the door for more skilled workers.",
        "image": "/images/news/canada-express-entry.jpg",
        "tag": "Canada",
        "time": "2 days ago",
        "readTime": "4 min read",
        "content": (
            "<p>Immigration, Refugees and Citizenship Canada held an all-program "
            "Express Entry draw, issuing invitations to apply for permanent residence.</p>"
            "<p>Candidates with a valid profile should keep language test results current.</p>"
        ),
    },
    {
        "title": "Australia Raises Skilled Visa Income Threshold",
        "summary": "Employers sponsoring temporary skilled workers must meet a higher minimum salary from July.",
        "image": "/images/news/australia-skilled-visa.jpg",
        "tag": "Australia",
        "time": "1 week ago",
        "readTime": "3 min read",
        "content": (
            "<p>The Temporary Skilled Migration Income Threshold has been indexed upward.</p>"
            "<p>Nominations lodged after the change must satisfy the new figure.</p>"
        ),
    },
    {
        "title": "Germany Opportunity Card: What Indian Applicants Need to Know",
        "description": "A points-based job-seeker card lets skilled professionals look for work in Germany for up to a year.",
        "image": "/images/news/germany-opportunity-card.jpg",
        "tag": "Germany",
        "time": "3 weeks ago",
        "readTime": "5 min read",
        "content": (
            "<p>The Chancenkarte awards points for qualifications, language skills, "
            "experience and age.</p><ul><li>Minimum six points</li>"
            "<li>Proof of funds required</li></ul>"
        ),
    },
]
