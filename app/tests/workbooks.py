"""Builders for test workbooks shaped like the PMS daily data export."""

import openpyxl

SALES_HEADERS = ['Equiry Date', 'Lead', 'Lead Qualified Date', 'Sales Order', 'Sales Order Date',
                 'Sales Cycle', 'Invoice Date', 'Invoice Value', 'City', 'State']

EMPLOYABILITY_HEADERS = ['Date',
                         'Present', 'Leave', 'Separated', 'Reason for Attrition',
                         'Present', 'Leave', 'Separated', 'Reason for Attrition',
                         'Present', 'Leave', 'Separated', 'Reason for Attrition',
                         'Total Days to Recruit', 'HR & IR', 'Finance & Account',
                         'Sales & Marketing', 'Operations', 'IT']

QUALITY_HEADERS = ['Date', 'Product Produced', 'Product Rejected', 'Reason for Rejction',
                   'Product Shipped', 'Product Returned', 'Product Remake', 'Cost of Remake',
                   'Product Repaired', 'Cost of Repair']

DELIVERY_HEADERS = ['Order Date', 'Order Value', 'Estimated Ship Date', 'Actual Ship Date',
                    'Lead Time', 'Delayed', 'Delayed Order Value', 'Reason for Delay']


def write_workbook(path, sheets):
    """Write {sheet name: [header row, *data rows]} to `path` and return it as a string."""
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for sheet_name, rows in sheets.items():
        worksheet = workbook.create_sheet(sheet_name)
        for row in rows:
            worksheet.append(row)
    workbook.save(path)
    return str(path)
