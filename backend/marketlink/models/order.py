"""
Modelos relacionados con órdenes/pedidos
"""
from sqlalchemy import Column, String, Date, DateTime, Text, Integer, DECIMAL, ForeignKey, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from marketlink.core.database import Base


class Order(Base):
    """
    Pedido de un supermercado a un único proveedor
    """
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, server_default=text("gen_random_uuid()::text"))

    # Relaciones
    supplier_id = Column(String(36), ForeignKey("suppliers.id"), nullable=False, index=True)
    supermarket_id = Column(String(36), ForeignKey("supermarkets.id"), nullable=False, index=True)

    # Estado (texto libre, sin máquina de estados)
    status = Column(String(50), nullable=False, server_default="pending", index=True)

    # Montos
    total_amount = Column(DECIMAL(12, 2), nullable=False, server_default="0")

    # Checkout
    delivery_address = Column(Text)
    delivery_date = Column(Date)
    payment_method = Column(String(20), nullable=False, server_default="cash")
    note = Column(Text)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    supplier = relationship("Supplier", back_populates="orders")
    supermarket = relationship("Supermarket", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    """
    Items/productos de cada orden
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    product_id = Column(String(36), ForeignKey("products.id"), index=True, nullable=False)

    # Datos del producto al momento del pedido
    product_name = Column(String(255))
    qty = Column(Integer, nullable=False)
    price = Column(DECIMAL(12, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product")
