# crud.py - the list / get / create / update / delete routes every resource shares

from flask import Blueprint, abort, jsonify, request, url_for
from flask_login import login_required
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from logger import Logger
from models import db
from schemas import MAX_INT
from uploads import save_upload

logger = Logger.get_logger(__name__)

PAGE_ERROR = 'Page number and page size must be greater than 0.'


def page_args(default_page_size):
    """Read pageNumber / pageSize from the query string, both must be >= 1."""
    values = []
    for name, default in (('pageNumber', 1), ('pageSize', default_page_size)):
        raw = request.args.get(name)
        if raw is None:
            values.append(default)
            continue
        try:
            values.append(int(raw))
        except ValueError:
            abort(400, description=PAGE_ERROR)
    page_number, page_size = values
    if page_number < 1 or page_size < 1:
        abort(400, description=PAGE_ERROR)
    return page_number, page_size


def paginate(query, page_number, page_size, serialize):
    # count first, a page past the end never reaches OFFSET / LIMIT
    total = query.order_by(None).count()
    offset = (page_number - 1) * page_size
    items = []
    if offset < total:
        items = query.offset(offset).limit(min(page_size, total - offset)).all()
    return {
        'totalRecords': total,
        'pageNumber': page_number,
        'pageSize': page_size,
        'totalPages': -(-total // page_size),
        'data': [serialize(item) for item in items],
    }


class CrudResource:
    """One JSON resource under /api/<name> backed by a single model.

    ``eager`` lists the loader options applied on both list and get, so the
    related rows come back in the same round of queries. Resources with an
    ``upload_category`` accept multipart forms with an ``image`` file.
    """

    def __init__(self, name, model, schema, label, page_size=10, eager=(), upload_category=None):
        self.name = name
        self.model = model
        self.schema = schema
        self.label = label
        self.page_size = page_size
        self.eager = tuple(eager)
        self.upload_category = upload_category
        self.pk = model.__mapper__.primary_key[0]

    @property
    def not_found(self):
        return f'{self.label} not found.'

    def blueprint(self):
        bp = Blueprint(self.name.lower(), __name__, url_prefix=f'/api/{self.name}')
        bp.add_url_rule('', 'list_items', login_required(self.list_items), methods=['GET'])
        bp.add_url_rule('', 'create_item', login_required(self.create_item), methods=['POST'])
        bp.add_url_rule('/<int:item_id>', 'get_item', login_required(self.get_item), methods=['GET'])
        bp.add_url_rule('/<int:item_id>', 'update_item', login_required(self.update_item), methods=['PUT'])
        bp.add_url_rule('/<int:item_id>', 'delete_item', login_required(self.delete_item), methods=['DELETE'])
        return bp

    def query(self):
        return self.model.query.options(*self.eager)

    def find_or_404(self, item_id, eager=False):
        if item_id > MAX_INT:
            abort(404, description=self.not_found)
        query = self.query() if eager else self.model.query
        return query.filter(self.pk == item_id).first_or_404(description=self.not_found)

    def read_body(self):
        """Validate the request body; returns (payload, image file or None)."""
        image = None
        if self.upload_category and not request.is_json:
            # blank form fields mean "not sent"
            data = {key: value for key, value in request.form.items() if value != ''}
            image = request.files.get('image')
            if image is not None and not image.filename:
                image = None
        else:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                abort(400, description='Request body must be a JSON object.')
        return self.schema.model_validate(data), image

    def save(self, item, stored):
        # the file is already on disk, if the row can't be written the file goes
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            if stored:
                stored.discard()
            abort(400, description='The request references a record that does not exist.')
        except SQLAlchemyError:
            db.session.rollback()
            if stored:
                stored.discard()
            raise

    # routes

    def list_items(self):
        page_number, page_size = page_args(self.page_size)
        query = self.query().order_by(self.pk)
        return jsonify(paginate(query, page_number, page_size, lambda item: item.to_dict()))

    def get_item(self, item_id):
        return jsonify(self.find_or_404(item_id, eager=True).to_dict())

    def create_item(self):
        payload, image = self.read_body()
        item = self.model(**payload.model_dump())

        stored = save_upload(image, self.upload_category) if image else None
        if stored:
            item.image_url = stored.url

        db.session.add(item)
        self.save(item, stored)
        item_id = getattr(item, self.pk.key)
        logger.info("Created %s %s", self.label, item_id)

        response = jsonify(self.find_or_404(item_id, eager=True).to_dict())
        response.headers['Location'] = url_for('.get_item', item_id=item_id)
        return response

    def update_item(self, item_id):
        item = self.find_or_404(item_id)
        payload, image = self.read_body()

        # PUT replaces every field, the picture only when a new one is sent
        for field, value in payload.model_dump().items():
            setattr(item, field, value)

        stored = save_upload(image, self.upload_category) if image else None
        if stored:
            item.image_url = stored.url

        self.save(item, stored)
        logger.info("Updated %s %s", self.label, item_id)
        return '', 204

    def delete_item(self, item_id):
        item = self.find_or_404(item_id)
        db.session.delete(item)
        db.session.commit()
        logger.info("Deleted %s %s", self.label, item_id)
        return '', 204
