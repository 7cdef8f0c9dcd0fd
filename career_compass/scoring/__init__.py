"""
scoring/ - Career Compass analysis strategies

Modules:
    utils.py                  - Decimal and percentage helpers
    context.py                - AnalysisContext and answer grouping
    career_reflection.py      - Five-question reflection statements
    mbti_scorer.py            - MBTI four-letter type
    big_five_scorer.py        - Big Five trait levels
    disc_scorer.py            - DISC style percentages
    holland_scorer.py         - Holland RIASEC code
    values_scorer.py          - Work-values tally
    confidence_calculator.py  - Rule-based and AI confidence
    strategy.py               - AnalysisStrategy interface
    rule_strategy.py          - Rule-based report
    prompt_builder.py         - Chat prompt for the AI path
    ai_strategy.py            - OpenAI-compatible AI report
    logged_strategy.py        - Logging proxy for any strategy
"""
