"""Invoice template: one rendering shared by download and email."""

from html import escape

from bakery.invoicing.invoice import InvoiceData

CURRENCY = "₹"

_STYLE = """
  body { font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif; color: #555; }
  .invoice-box { max-width: 800px; margin: auto; padding: 30px; border: 1px solid #eee; }
  .invoice-box table { width: 100%; line-height: inherit; text-align: left; border-collapse: collapse; }
  .invoice-box td { padding: 6px; vertical-align: top; }
  .heading td { background: #eee; border-bottom: 1px solid #ddd; font-weight: bold; }
  .item td { border-bottom: 1px solid #eee; }
  .total td { border-top: 2px solid #eee; font-weight: bold; }
  .num { text-align: right; }
"""


def _money(value: float) -> str:
    return f"{CURRENCY}{value:,.2f}"


class InvoiceTemplate:
    @staticmethod
    def render(data: InvoiceData) -> dict:
        """Return subject, plain-text body and HTML body for an invoice."""
        date = data.placed_at.strftime("%d %b %Y") if data.placed_at else "N/A"
        address = ", ".join(line for line in data.address_lines if line) or "No address provided"

        text_lines = "\n".join(
            f"{line.product_name} x{line.quantity} - {_money(line.unit_price)} each" for line in data.lines
        )
        body = (
            "Thank you for your order!\n\n"
            f"Order Invoice #{data.order_id}\n"
            f"Date: {date}\n"
            f"Customer: {data.customer_name}\n"
            f"Email: {data.customer_email}\n"
            f"Address: {address}\n\n"
            f"Items:\n{text_lines}\n"
            f"Total: {_money(data.grand_total)}\n\n"
            "If you have any questions, please contact us."
        )

        rows = "".join(
            '<tr class="item">'
            f"<td>{escape(line.product_name)}</td>"
            f'<td class="num">{line.quantity}</td>'
            f'<td class="num">{escape(_money(line.unit_price))}</td>'
            f'<td class="num">{escape(_money(line.line_total))}</td>'
            "</tr>"
            for line in data.lines
        )
        address_html = "<br>".join(escape(line) for line in data.address_lines if line) or "No address provided"

        html_body = (
            "<!DOCTYPE html>"
            '<html><head><meta charset="utf-8">'
            f"<title>Invoice for Order #{escape(data.order_id)}</title>"
            f"<style>{_STYLE}</style></head><body>"
            '<div class="invoice-box">'
            f"<h2>Order Invoice #{escape(data.order_id)}</h2>"
            f"<p>Date: {escape(date)}<br>Status: {escape(data.status or '')}"
            f"<br>Payment: {escape(data.payment_method or '')}</p>"
            f"<p><strong>{escape(data.customer_name)}</strong><br>{escape(data.customer_email)}"
            f"<br>{address_html}</p>"
            "<table>"
            '<tr class="heading"><td>Item</td><td class="num">Qty</td>'
            '<td class="num">Price</td><td class="num">Total</td></tr>'
            f"{rows}"
            f'<tr class="total"><td colspan="3">Total</td>'
            f'<td class="num">{escape(_money(data.grand_total))}</td></tr>'
            "</table>"
            "<p>Thank you for shopping with us!</p>"
            "</div></body></html>"
        )

        return {
            "subject": f"Order Invoice #{data.order_id}",
            "body": body,
            "html_body": html_body,
        }
