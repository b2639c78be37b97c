"""
Default page content.

Each calculator page has exactly one default essay. It is served whenever the
content store has no record for the page or cannot be reached.
"""

from typing import Dict, NamedTuple


class DefaultContent(NamedTuple):
    title: str
    content: str


DEFAULT_PAGE_CONTENT: Dict[str, DefaultContent] = {
    "auto_loan_essay": DefaultContent(
        title="Understanding Auto Loans and Vehicle Affordability",
        content="""# Understanding Auto Loans and Vehicle Affordability

The monthly payment is only the start of what a car costs. Insurance, fuel,
maintenance, registration and depreciation all add up over the life of a loan.

## How Inflation Affects Auto Financing

Vehicle prices, fuel and repair costs all rise with inflation. A fixed loan
payment gets cheaper in real terms each year, while running costs get dearer.

## Choosing a Loan

Longer terms lower the monthly payment but raise the total interest paid. A
larger down payment reduces both.
""",
    ),
    "legacy_planner_essay": DefaultContent(
        title="Understanding Multi-Generational Wealth Planning",
        content="""# Understanding Multi-Generational Wealth Planning

Wealth handed down over several generations is measured against prices that
keep rising. A portfolio can grow in nominal terms while its purchasing power
falls.

## Healthcare Costs

Healthcare prices have historically risen faster than general inflation, so
they take a growing share of inherited wealth with each generation.
""",
    ),
    "ppp_essay": DefaultContent(
        title="Understanding Purchasing Power Parity",
        content="""## Understanding Purchasing Power Parity

Purchasing Power Parity (PPP) compares what the same amount of money buys in
different countries. Unlike market exchange rates, PPP factors account for
differences in local price levels, which makes salary and cost-of-living
comparisons meaningful.
""",
    ),
    "insurance_inflation_essay": DefaultContent(
        title="Why Health Insurance Premiums Outpace Inflation",
        content="""# Why Health Insurance Premiums Outpace Inflation

Medical inflation runs well above general inflation in most countries. Over a
decade or two, the gap compounds into premiums that take a much larger share
of household income.
""",
    ),
    "budget_essay": DefaultContent(
        title="The 50/30/20 Budget in an Inflationary World",
        content="""# The 50/30/20 Budget in an Inflationary World

The 50/30/20 rule splits take-home pay into needs, wants and savings. As
prices rise, each category needs more money to buy the same things.
""",
    ),
    "emergency_fund_essay": DefaultContent(
        title="Building an Emergency Fund That Keeps Its Value",
        content="""# Building an Emergency Fund That Keeps Its Value

Three to six months of essential expenses is the usual target. Inflation
raises that target every year, so the fund needs to grow to keep pace.
""",
    ),
    "roi_essay": DefaultContent(
        title="Measuring Real Investment Returns",
        content="""# Measuring Real Investment Returns

A nominal return overstates what an investment earned once inflation and
taxes are taken into account. Comparing against a risk-free Treasury yield
shows the real reward for the risk taken.
""",
    ),
    "student_loan_essay": DefaultContent(
        title="Student Loans and the Real Cost of Repayment",
        content="""# Student Loans and the Real Cost of Repayment

A fixed student loan payment weighs less each year as prices and incomes
rise. Income-driven plans tie payments to earnings above the poverty line.
""",
    ),
}
