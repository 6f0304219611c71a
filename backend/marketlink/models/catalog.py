"""
Modelos de catálogo y directorio (proveedores, supermercados, productos)
"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, DECIMAL, ForeignKey, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from marketlink.core.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(String(36), primary_key=True, server_default=text("gen_random_uuid()::text"))
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255))
    address = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    products = relationship("Product", back_populates="supplier")
    orders = relationship("Order", back_populates="supplier")


class Supermarket(Base):
    """
    Directorio de compradores (supermercados)
    """
    __tablename__ = "supermarkets"

    id = Column(String(36), primary_key=True, server_default=text("gen_random_uuid()::text"))
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255))
    address = Column(Text)
    phone = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    orders = relationship("Order", back_populates="supermarket")


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, server_default=text("gen_random_uuid()::text"))
    supplier_id = Column(String(36), ForeignKey("suppliers.id"), index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(100), index=True)
    price = Column(DECIMAL(12, 2), nullable=False, server_default="0")

    is_active = Column(Boolean, nullable=False, server_default=text("true"), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    supplier = relationship("Supplier", back_populates="products")
