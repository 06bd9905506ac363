from datetime import date

from eurofx import CurrencyUnavailableError, EuroFx

print(EuroFx.__version__)  # 0.1.0

fx = EuroFx()

# Download the full ECB history (or use fx.load_zip("eurofxref-hist.zip"))
fx.load_live()
print(fx.currency_names())

# All reference rates for a single day
print(fx.rates_on(date(2021, 10, 15)))

# Convert 100 USD to GBP at that day's rates
print(fx.convert(date(2021, 10, 15), 100.0, "USD", "GBP"))

# Highest and average USD rate over a window
print(fx.highest("2021-10-04", "2021-10-15", "USD"))
print(fx.average("2021-10-04", "2021-10-15", "USD", remove_unavailable=True))
print(fx.statistics("2021-01-01", "2021-12-31", "USD"))

# Currencies that were not published on a date raise CurrencyUnavailableError
try:
    fx.convert("2021-10-16", 1.0, "USD", "GBP")
except CurrencyUnavailableError as exc:
    print(exc)
