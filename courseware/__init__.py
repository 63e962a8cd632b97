"""
Courseware domain logic: track syllabi, access tiers and entitlements.
Framework-agnostic; the FastAPI layer lives in web_api/.
"""
