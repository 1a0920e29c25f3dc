from django.dispatch import Signal

# Sent after a booking went through with one or more under-stocked lines.
# kwargs: warnings (list[StockWarning]), actor (User or None), project (Project or None)
stock_warning_raised = Signal()
