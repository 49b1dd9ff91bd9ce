"""Required minimum distributions.

Divisors from the IRS Uniform Lifetime Table (2022+), ages 72-120.
"""

from decimal import Decimal

from rothplan.models.results import RmdScheduleEntry

RMD_START_AGE = 72

UNIFORM_LIFETIME_TABLE: dict[int, Decimal] = {
    age: Decimal(factor)
    for age, factor in {
        72: "27.4", 73: "26.5", 74: "25.5", 75: "24.6", 76: "23.7", 77: "22.9",
        78: "22.0", 79: "21.1", 80: "20.2", 81: "19.4", 82: "18.5", 83: "17.7",
        84: "16.8", 85: "16.0", 86: "15.2", 87: "14.4", 88: "13.7", 89: "12.9",
        90: "12.2", 91: "11.5", 92: "10.8", 93: "10.1", 94: "9.5", 95: "8.9",
        96: "8.4", 97: "7.8", 98: "7.3", 99: "6.8", 100: "6.4", 101: "6.0",
        102: "5.6", 103: "5.2", 104: "4.9", 105: "4.6", 106: "4.3", 107: "4.1",
        108: "3.9", 109: "3.7", 110: "3.5", 111: "3.4", 112: "3.3", 113: "3.1",
        114: "3.0", 115: "2.9", 116: "2.8", 117: "2.7", 118: "2.5", 119: "2.3",
        120: "2.0",
    }.items()
}

# Ages outside the table withdraw the whole balance.
OUT_OF_TABLE_FACTOR = Decimal("1.0")


def rmd_factor(age: int) -> Decimal:
    return UNIFORM_LIFETIME_TABLE.get(age, OUT_OF_TABLE_FACTOR)


def rmd(balance: Decimal, age: int) -> Decimal:
    """Required distribution for a year-start balance at the given age."""
    return balance / rmd_factor(age)


def rmd_schedule(
    starting_balance: Decimal,
    starting_age: int,
    years: int,
    growth_rate: Decimal,
) -> list[RmdScheduleEntry]:
    """Project a single traditional account: grow, then withdraw the RMD."""
    schedule: list[RmdScheduleEntry] = []
    balance = starting_balance

    for year in range(years):
        age = starting_age + year
        balance = balance * (1 + growth_rate)
        distribution = rmd(balance, age) if age >= RMD_START_AGE else Decimal("0")
        balance = max(balance - distribution, Decimal("0"))
        schedule.append(
            RmdScheduleEntry(year=year + 1, age=age, balance=balance, rmd=distribution)
        )

    return schedule
