from django.contrib import admin

from discovery.models import CategoryInteraction, Event, InterestProfile, TicketType


class TicketTypeInline(admin.TabularInline):
    model = TicketType
    extra = 1


class CategoryInteractionInline(admin.TabularInline):
    model = CategoryInteraction
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "venue_city", "starts_at", "status"]
    list_filter = ["status", "category"]
    search_fields = ["title", "venue_city", "organizer_name"]
    inlines = [TicketTypeInline]


@admin.register(TicketType)
class TicketTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "price", "quantity", "sold"]
    list_filter = ["event__category"]


@admin.register(InterestProfile)
class InterestProfileAdmin(admin.ModelAdmin):
    list_display = ["user_id", "preferred_city", "price_preference", "updated_at"]
    search_fields = ["user_id"]
    inlines = [CategoryInteractionInline]
