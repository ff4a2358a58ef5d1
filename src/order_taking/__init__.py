"""
order_taking — the place-order workflow.

Turns a raw customer order into validated, priced and acknowledged domain
events: validation against the product catalogue and an address service,
pricing, an acknowledgment email, and OrderPlaced / BillableOrderPlaced events.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "0.1.0"
