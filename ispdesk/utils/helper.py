def money(value, symbol=""):
    return f"{symbol}{float(value):,.2f}"
