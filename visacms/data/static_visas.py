"""Bundled visa programs served alongside the live collection."""

from typing import Dict, List

STATIC_VISAS: List[Dict[str, str]] = [
    {
        "name": "Canada PR Visa",
        "slug": "canada-pr-visa",
        "description": "Permanent residence through Express Entry and the Provincial Nominee Programs.",
        "info": "<h2>Canada PR</h2><p>Live, work and study anywhere in Canada.</p>",
        "metaTitle": "Canada PR Visa for Indians | Express Entry Guide",
        "metaDescription": "Eligibility, CRS points and documents for Canada permanent residence.",
        "metaKeywords": "canada pr, express entry, crs score",
        "image": "/images/visas/canada-pr.jpg",
    },
    {
        "name": "Australia Skilled Independent Visa (Subclass 189)",
        "slug": "australia-subclass-189",
        "description": "A points-tested permanent visa for invited skilled workers.",
        "info": "<h2>Subclass 189</h2><p>No sponsor or nomination needed.</p>",
        "metaTitle": "Australia Subclass 189 Visa | Points Test & Eligibility",
        "metaDescription": "Requirements and points calculation for the Skilled Independent visa.",
        "metaKeywords": "australia pr, subclass 189, skillselect",
        "image": "/images/visas/australia-189.jpg",
    },
    {
        "name": "Germany Job Seeker Visa",
        "slug": "germany-job-seeker-visa",
        "description": "Stay in Germany for up to a year while looking for skilled employment.",
        "info": "<h2>Job Seeker Visa</h2><p>Convert to an EU Blue Card once hired.</p>",
        "metaTitle": "",
        "metaDescription": "",
        "metaKeywords": "",
        "image": "/images/visas/germany-job-seeker.jpg",
    },
]
