"""
Schema Registry: the ordered field descriptors of a country's application form.
"""

from ..dynamic_fields import FieldDescriptor
from ..models import VisaRequirement


def load_field_descriptors(country):
    """
    Returns the country's FieldDescriptors, sorted by order_index
    (ties broken by field_name so the sequence is deterministic).
    """
    requirements = VisaRequirement.objects.filter(
        country=country).order_by('order_index', 'field_name')
    return [FieldDescriptor.from_requirement(req) for req in requirements]


def split_descriptors(descriptors):
    """
    (answers, uploads): the wizard asks text-like fields on the trip step
    and file fields on the documents step.
    """
    answers = [d for d in descriptors if not d.is_file]
    uploads = [d for d in descriptors if d.is_file]
    return answers, uploads


def serialize_descriptor(descriptor):
    return {
        'name': descriptor.name,
        'type': descriptor.kind.value,
        'label': descriptor.label,
        'required': descriptor.required,
        'options': list(descriptor.options),
        'placeholder': descriptor.placeholder,
        'order': descriptor.order,
    }
