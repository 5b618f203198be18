from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side

from services.request_processor import DISCARDED_LABEL, STORED_LABEL


def render_report(results, catalog):
    lines = ["Processing Log:"]
    for entries, _ in results:
        lines.extend(entries)
    lines.append("")

    lines.append("Item List:")
    for item in catalog:
        lines.append(f"  {item.item_id:>2} {item.name}")
    lines.append("")

    lines.append("Storage Summary:")
    for _, inventory in results:
        lines.append(str(inventory))
    return "\n".join(lines) + "\n"


def _style_header(sheet, header_fill, header_font, border):
    for cell in sheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.border = border


def build_report_workbook(results, catalog):
    workbook = Workbook()

    header_fill = PatternFill(fill_type="solid", fgColor="FFE5E7EB")
    header_font = Font(bold=True, color="FF1F2937")
    body_font = Font(color="FF111827")
    stored_font = Font(color="FF166534")
    discarded_font = Font(bold=True, color="FF92400E")
    thin_side = Side(style="thin", color="FFCBD5E1")
    all_border = Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)

    log_sheet = workbook.active
    log_sheet.title = "Processing Log"
    log_sheet.append(["Inventory", "Entry #", "Outcome", "Log Entry"])
    _style_header(log_sheet, header_fill, header_font, all_border)
    for inventory_number, (entries, _) in enumerate(results, start=1):
        for entry_number, entry in enumerate(entries, start=1):
            outcome = entry.split(" ", 1)[0]
            log_sheet.append([inventory_number, entry_number, outcome, entry])
            row = log_sheet[log_sheet.max_row]
            for cell in row:
                cell.border = all_border
                cell.font = body_font
            if outcome == STORED_LABEL:
                row[2].font = stored_font
            elif outcome == DISCARDED_LABEL:
                row[2].font = discarded_font

    item_sheet = workbook.create_sheet("Item List")
    item_sheet.append(["Item ID", "Name"])
    _style_header(item_sheet, header_fill, header_font, all_border)
    for item in catalog:
        item_sheet.append([item.item_id, item.name])

    summary_sheet = workbook.create_sheet("Storage Summary")
    summary_sheet.append(
        ["Inventory", "Capacity", "Occupied", "Remaining", "Utilization %", "Stored Stacks"]
    )
    _style_header(summary_sheet, header_fill, header_font, all_border)
    for inventory_number, (_, inventory) in enumerate(results, start=1):
        summary_sheet.append(
            [
                inventory_number,
                inventory.capacity,
                inventory.occupied,
                inventory.remaining(),
                round(inventory.utilization_pct(), 2),
                ", ".join(f"{stack.item.name} x{stack.quantity}" for stack in inventory.stacks),
            ]
        )

    for sheet, widths in (
        (log_sheet, {"A": 12, "B": 10, "C": 14, "D": 48}),
        (item_sheet, {"A": 10, "B": 36}),
        (summary_sheet, {"A": 12, "B": 12, "C": 12, "D": 12, "E": 14, "F": 60}),
    ):
        for col_letter, width in widths.items():
            sheet.column_dimensions[col_letter].width = width
    return workbook
