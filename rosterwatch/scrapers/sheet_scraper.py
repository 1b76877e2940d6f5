from loguru import logger

from .base_scraper import BaseScraper, FetchError

CSV_ACCEPT = "text/csv,text/plain,application/octet-stream"


class SheetScraper(BaseScraper):
    """Fetches the published CSV export of a region's roster sheet."""

    source = "Google Sheets"

    async def fetch_csv(self, url: str) -> str:
        response = await self._make_request(
            "GET", url, headers={"Accept": CSV_ACCEPT}
        )
        body = response.text

        # An unpublished sheet redirects to an HTML page instead of failing
        head = body.lstrip()[:64].lower()
        if head.startswith(("<!doctype html", "<html")):
            snippet = (body[:200] + "...") if len(body) > 200 else body
            raise FetchError(
                f"Expected CSV but got an HTML page. Is the sheet still published? Snippet: {snippet}"
            )

        logger.debug(f"Fetched {len(body)} characters from {url}")
        return body
