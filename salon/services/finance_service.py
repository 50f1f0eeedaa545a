"""
Finance summaries over a salon's sales and expenses.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from salon.models.resources import Expense, Sale, SaleItem

MISSING_REFERENCE_LABEL = '(supprimé)'


def month_key(day: Optional[date] = None) -> str:
    """YYYY-MM for day (today by default)."""
    return (day or date.today()).strftime('%Y-%m')


def monthly_summary(sales: List[Sale], expenses: List[Expense],
                    month: Optional[str] = None) -> Dict[str, Any]:
    """
    Aggregate one month of activity.

    Args:
        sales: Sales of the salon
        expenses: Expenses of the salon
        month: 'YYYY-MM' (defaults to current month)

    Returns:
        dict: Totals, product/service split and breakdowns
    """
    month = month or month_key()
    month_sales = [s for s in sales if (s.date or '').startswith(month)]
    month_expenses = [e for e in expenses if (e.date or '').startswith(month)]

    revenue = sum(s.total_amount for s in month_sales)
    spent = sum(e.amount for e in month_expenses)

    by_payment_method: Dict[str, Any] = {}
    for sale in month_sales:
        by_payment_method[sale.payment_method] = by_payment_method.get(sale.payment_method, 0) + sale.total_amount

    by_expense_category: Dict[str, Any] = {}
    for expense in month_expenses:
        by_expense_category[expense.category] = by_expense_category.get(expense.category, 0) + expense.amount

    def items_total(item_type):
        return sum(i.amount for s in month_sales for i in s.items if i.type == item_type)

    return {
        'month': month,
        'revenue': revenue,
        'expenses': spent,
        'profit': revenue - spent,
        'product_revenue': items_total('produit'),
        'service_revenue': items_total('prestation'),
        'sale_count': len(month_sales),
        'by_payment_method': by_payment_method,
        'by_expense_category': by_expense_category,
    }


def resolve_item_label(item: SaleItem, catalog) -> str:
    """
    Current name of the product/service a sale line points at.

    catalog is any collection with get(id). Deleted references fall back to
    the name captured on the line, then to a placeholder.
    """
    record = catalog.get(item.reference_id) if item.reference_id else None
    if record is not None:
        return record.name
    return item.name or MISSING_REFERENCE_LABEL
