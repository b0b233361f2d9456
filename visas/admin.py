from django.contrib import admin
from .forms import VisaRequirementForm, VisaTypeForm
from .models import (
    Country, VisaType, VisaRequirement,
    VisaApplication, VisaApplicationFile
)

# --- 1. Catalog Configuration ---


class VisaRequirementInline(admin.TabularInline):
    model = VisaRequirement
    form = VisaRequirementForm
    extra = 1
    ordering = ['order_index']


class VisaTypeInline(admin.StackedInline):
    model = VisaType
    form = VisaTypeForm
    extra = 0


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'priority', 'is_active')
    search_fields = ('name', 'code')
    list_filter = ('is_active',)
    # Add form fields and visa products directly inside the Country
    inlines = [VisaRequirementInline, VisaTypeInline]


@admin.register(VisaType)
class VisaTypeAdmin(admin.ModelAdmin):
    form = VisaTypeForm
    list_display = ('name', 'country', 'visa_category', 'visa_fee',
                    'visa_processing_days', 'is_active')
    list_filter = ('is_active', 'visa_category')
    search_fields = ('name', 'country__name')

# --- 2. Applications (Client Data) ---


class ApplicationFileInline(admin.TabularInline):
    model = VisaApplicationFile
    extra = 0
    readonly_fields = ('field_name', 'file_path', 'file_name',
                       'file_size', 'file_type', 'uploaded_at')


@admin.register(VisaApplication)
class VisaApplicationAdmin(admin.ModelAdmin):
    # Back office moves the status: pending -> under_review -> approved / rejected
    list_display = ('id', 'user', 'country', 'visa_type', 'status', 'submitted_at')
    list_filter = ('status', 'country')
    search_fields = ('user__email', 'country__name')
    readonly_fields = ('user', 'country', 'visa_type', 'application_data', 'submitted_at')
    inlines = [ApplicationFileInline]
