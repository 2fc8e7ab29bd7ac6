"""
Analytics core: scoring one meeting and aggregating many.

Modules
-------
scorer      : score_meeting() + speaker_ratio(), the fixed usefulness heuristic.
aggregator  : summarize() + breakdown_metrics() + compute_trends().
recommender : recommend(), async / decline / optimize suggestions.

All functions are pure; none of them touch the database.
"""
