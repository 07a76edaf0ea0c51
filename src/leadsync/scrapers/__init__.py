"""
Scrapers Package

Paginated extraction of lead records from the portal lead list API.
"""

from .lead_list_scraper import LeadListScraper

__all__ = [
    "LeadListScraper",
]
