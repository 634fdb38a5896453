# this file defines the database structure for the supermarket system
# six business tables plus users and roles for sign up / login

from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
import uuid

db = SQLAlchemy()


def _money(value):
    # Numeric columns come back as Decimal, the client expects plain numbers
    return float(value) if value is not None else None


# users <-> roles link table
user_roles = db.Table(
    'user_roles',
    db.Column('user_id', db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    db.Column('role_id', db.Integer, db.ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True),
)


# credential store: login accounts
class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(256), unique=True, nullable=False)
    email = db.Column(db.String(256), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)  # stored as a secure hash
    security_stamp = db.Column(db.String(36), nullable=False, default=lambda: str(uuid.uuid4()))

    roles = db.relationship('Role', secondary=user_roles, back_populates='users', lazy='selectin')

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def role_names(self):
        return sorted(role.name for role in self.roles)

    def __repr__(self):
        return f'<User {self.username}>'


class Role(db.Model):
    __tablename__ = 'roles'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False)

    users = db.relationship('User', secondary=user_roles, back_populates='roles')

    def __repr__(self):
        return f'<Role {self.name}>'


# table 1: categories - groups products on the shelves
class Category(db.Model):
    __tablename__ = 'categories'

    category_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)

    products = db.relationship('Product', back_populates='category')

    def to_dict(self):
        return {'categoryId': self.category_id, 'name': self.name}


# table 2: products - item details, price and stock on hand
class Product(db.Model):
    __tablename__ = 'products'

    product_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Numeric(18, 2), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    image_url = db.Column(db.String(500))
    category_id = db.Column(db.Integer, db.ForeignKey('categories.category_id', ondelete='SET NULL'))

    category = db.relationship('Category', back_populates='products')
    order_items = db.relationship('OrderItem', back_populates='product')

    def to_dict(self):
        return {
            'productId': self.product_id,
            'name': self.name,
            'description': self.description,
            'price': _money(self.price),
            'stockQuantity': self.stock_quantity,
            'imageUrl': self.image_url,
            'categoryId': self.category_id,
            'category': self.category.to_dict() if self.category else None,
        }

    def __repr__(self):
        return f'<Product {self.name}>'


# table 3: customers
class Customer(db.Model):
    __tablename__ = 'customers'

    customer_id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(256))
    phone = db.Column(db.String(50), nullable=False)

    orders = db.relationship('Order', back_populates='customer')

    def to_dict(self):
        return {
            'customerId': self.customer_id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'phone': self.phone,
        }


# table 4: orders - total is whatever the till sent, it is not summed from the items
class Order(db.Model):
    __tablename__ = 'orders'

    order_id = db.Column(db.Integer, primary_key=True)
    order_date = db.Column(db.DateTime, nullable=False)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.customer_id', ondelete='SET NULL'))
    total_amount = db.Column(db.Numeric(18, 2), nullable=False)
    image_url = db.Column(db.String(500))

    customer = db.relationship('Customer', back_populates='orders')
    order_items = db.relationship('OrderItem', back_populates='order', order_by='OrderItem.order_item_id')

    def to_dict(self, nested=True):
        data = {
            'orderId': self.order_id,
            'orderDate': self.order_date.isoformat() if self.order_date else None,
            'customerId': self.customer_id,
            'totalAmount': _money(self.total_amount),
            'imageUrl': self.image_url,
        }
        if nested:
            data['customer'] = self.customer.to_dict() if self.customer else None
            data['orderItems'] = [item.to_dict(nested=False) for item in self.order_items]
        return data


# table 5: order items - lines of an order, quantity and subtotal are not checked against the product
class OrderItem(db.Model):
    __tablename__ = 'order_items'

    order_item_id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.order_id', ondelete='SET NULL'))
    product_id = db.Column(db.Integer, db.ForeignKey('products.product_id', ondelete='SET NULL'))
    quantity = db.Column(db.Integer, nullable=False)
    subtotal = db.Column(db.Numeric(18, 2), nullable=False)
    image_url = db.Column(db.String(500))

    order = db.relationship('Order', back_populates='order_items')
    product = db.relationship('Product', back_populates='order_items')

    def to_dict(self, nested=True):
        data = {
            'orderItemId': self.order_item_id,
            'orderId': self.order_id,
            'productId': self.product_id,
            'quantity': self.quantity,
            'subtotal': _money(self.subtotal),
            'imageUrl': self.image_url,
        }
        if nested:
            data['order'] = self.order.to_dict(nested=False) if self.order else None
            data['product'] = self.product.to_dict() if self.product else None
        return data


# table 6: employees - staff records with an optional photo
class Employee(db.Model):
    __tablename__ = 'employees'

    employee_id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(100), nullable=False)
    salary = db.Column(db.Numeric(18, 2), nullable=False)
    image_url = db.Column(db.String(500))

    def to_dict(self):
        return {
            'employeeId': self.employee_id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'role': self.role,
            'salary': _money(self.salary),
            'imageUrl': self.image_url,
        }
