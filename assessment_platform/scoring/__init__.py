"""
scoring/ — Assessment Scoring Engine

Modules:
    utils.py                   - Decimal utilities
    records.py                 - Frozen input records and ScoringPolicy
    classifier.py              - Response Classifier
    objective_scorer.py        - Objective Scorer (global / per stage / per category)
    trait_naming.py            - Legacy trait name derivation
    trait_aggregator.py        - Trait Aggregator
    weighted_trait_scorer.py   - Weighted Trait Scorer (opinion score)
    dominant_traits.py         - Dominant Trait Resolver
    overall_combiner.py        - Overall Score Combiner
    timing.py                  - Timing Aggregator
    decision.py                - Pass/fail decision and ranking
    engine.py                  - compute_assessment() entry point
"""
