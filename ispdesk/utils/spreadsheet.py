from io import BytesIO
import pandas as pd


def rows_to_xlsx(rows, sheet_name, columns=None):
    """Write a list of dicts to a single-sheet workbook and return the buffer."""
    df = pd.DataFrame(rows, columns=columns)
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
    buffer.seek(0)
    return buffer
