"""Daily portfolio valuation and report dispatch."""
