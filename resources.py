# resources.py - the six CRUD resources and what each one loads, validates and stores

from sqlalchemy.orm import joinedload, selectinload

from crud import CrudResource
from models import Category, Customer, Employee, Order, OrderItem, Product
from schemas import CategoryIn, CustomerIn, EmployeeIn, OrderIn, OrderItemIn, ProductIn

categories = CrudResource('Categories', Category, CategoryIn, 'Category', page_size=5)

customers = CrudResource('Customer', Customer, CustomerIn, 'Customer')

products = CrudResource(
    'Products', Product, ProductIn, 'Product',
    eager=[joinedload(Product.category)],
    upload_category='Products',
)

orders = CrudResource(
    'Orders', Order, OrderIn, 'Order',
    eager=[joinedload(Order.customer), selectinload(Order.order_items)],
    upload_category='Orders',
)

order_items = CrudResource(
    'OrderItems', OrderItem, OrderItemIn, 'Order item',
    eager=[joinedload(OrderItem.order), joinedload(OrderItem.product).joinedload(Product.category)],
    upload_category='OrderItems',
)

employees = CrudResource('Employees', Employee, EmployeeIn, 'Employee', upload_category='Employee')

ALL_RESOURCES = (categories, customers, products, orders, order_items, employees)
