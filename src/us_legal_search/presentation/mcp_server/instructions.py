"""
MCP Server Instructions - usage guide for AI agents.

Kept apart from server.py so the text can be edited without touching wiring.
"""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
US Legal Search MCP Server - federal legislation, regulations, statutes and case law

═══════════════════════════════════════════════════════════════════════════════
🎯 Choosing a tool
═══════════════════════════════════════════════════════════════════════════════

## Broad question, unsure where the answer lives
search_all_legal(query="clean water", limit=20)
→ bills, Federal Register documents, US Code sections and public comments,
  grouped by source (each source returns up to ceil(limit / 4) results)

## Legislation (Congress.gov)
search_congress_bills(query="data privacy", congress=118)
get_recent_bills(congress=118)
get_bill_details(congress=118, bill_type="hr", bill_number=815)
search_congress_votes(congress=118, chamber="House")       # needs CONGRESS_API_KEY
get_congress_committees(chamber="Senate")                   # needs CONGRESS_API_KEY

## Regulations
search_federal_register(query="vehicle emissions")
get_recent_regulations(limit=10)
get_federal_register_document(document_number="2024-01234")
search_public_comments(query="net neutrality")              # needs REGULATIONS_GOV_API_KEY
get_public_comment(comment_id="EPA-HQ-OW-2024-0001-0042")  # needs REGULATIONS_GOV_API_KEY

## Statutes (US Code)
search_us_code(query="deprivation of rights", title=42)
get_us_code_section(title=42, section="1983")

## Case law (CourtListener)
search_court_opinions(query="qualified immunity", court="scotus")
get_recent_court_opinions(court="ca9")
get_court_opinion(opinion_id=12345)

═══════════════════════════════════════════════════════════════════════════════
⚠️ Notes
═══════════════════════════════════════════════════════════════════════════════

- Search results are re-ranked by keyword relevance (titles weigh most).
  Public comments are returned newest first.
- limit accepts 1-50; larger values are clamped.
- An upstream outage yields an empty result for that source, never an error.
  An empty list from votes/committees/comments usually means a missing API key.
- search_all_legal does not include court opinions.
"""
