"""
Loan policy constants.

These bound every request and every offer the engine produces. They are
product policy, not deployment configuration, so they live here rather than
in `loan_engine.config.Settings`.
"""

# Amounts in euros
MINIMUM_LOAN_AMOUNT = 2000
MAXIMUM_LOAN_AMOUNT = 10000

# Periods in months
MINIMUM_LOAN_PERIOD = 12
MAXIMUM_LOAN_PERIOD = 60

# Credit modifier per risk segment (euros of loan supported per month)
SEGMENT_LOW_CREDIT_MODIFIER = 100
SEGMENT_MID_CREDIT_MODIFIER = 300
SEGMENT_HIGH_CREDIT_MODIFIER = 1000

# Age band
MINIMUM_AGE = 18
MAXIMUM_AGE_AT_REPAYMENT = 80  # Nobody should still be repaying past this age
MAXIMUM_AGE = MAXIMUM_AGE_AT_REPAYMENT - MAXIMUM_LOAN_PERIOD // 12
