from pathlib import Path

from sales_reporting import ExchangeRateTable, SalesReporter, SalesStore, load_rate_table

print(SalesReporter.__version__)  # 0.1.0

# Default Usage: reads ./sales.json, writes ./report_<year>_<month>.txt
reporter = SalesReporter()
result = reporter.create_report_for_year_and_month(2024, 3)
print(result.lines)
# => ('Monatlicher Verkaufsbericht (03/2024)', '----------------------------------------', 'Gesamt Umsatz in USD: 155.00')

# Preview a month without writing anything
print(reporter.build_report(2024, 4).total)

# Custom rates, CSV input and a dedicated output directory
rates = ExchangeRateTable({"EUR": "1.08", "GBP": "1.27", "CHF": "1.12"})
reporter = SalesReporter(source="exports/sales.csv", sink=Path("reports"), rates=rates)
reporter.create_report_for_year_and_month(2024, 3)

# Rates can also live in a JSON file: {"base_currency": "USD", "rates": {"EUR": 1.1}}
reporter = SalesReporter(rates=load_rate_table("rates.json"))

# Sales kept in a database; reports stored alongside them
with SalesStore("sales.db") as store:
    print(len(store.fetch_all()))
reporter = SalesReporter(source="sales.db", sink="sqlite:///sales.db")
reporter.create_report_for_year_and_month(2024, 3)
reporter.close()
