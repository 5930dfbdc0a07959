# medhub/app/seo/forms.py
from django import forms
from .models import SeoMeta
from .services import DEFAULT_ROBOTS, DEFAULT_TWITTER_CARD, get_entity_model

INPUT_CLASSES = 'w-full p-2 border border-gray-300 rounded-md shadow-sm focus:outline-none focus:ring-2 focus:ring-indigo-500'


class SeoMetaForm(forms.ModelForm):
    # Tighter than the columns so editors get search-result friendly values
    seo_title = forms.CharField(
        max_length=60,
        required=False,
        error_messages={'max_length': 'SEO Title must be less than 60 characters'},
        widget=forms.TextInput(attrs={'class': INPUT_CLASSES}),
    )
    seo_description = forms.CharField(
        max_length=160,
        required=False,
        error_messages={'max_length': 'SEO Description must be less than 160 characters'},
        widget=forms.Textarea(attrs={'rows': 3, 'class': INPUT_CLASSES}),
    )
    seo_keywords = forms.CharField(
        max_length=500,
        required=False,
        error_messages={'max_length': 'SEO Keywords must be less than 500 characters'},
        widget=forms.Textarea(attrs={'rows': 2, 'class': INPUT_CLASSES}),
    )
    canonical_url = forms.URLField(
        assume_scheme='https',
        max_length=500,
        required=False,
        error_messages={'invalid': 'Canonical URL must be a valid URL'},
        widget=forms.URLInput(attrs={'class': INPUT_CLASSES}),
    )
    meta_robots = forms.CharField(
        max_length=100,
        required=False,
        error_messages={'max_length': 'Meta Robots must be less than 100 characters'},
        widget=forms.TextInput(attrs={'class': INPUT_CLASSES}),
    )
    twitter_card = forms.CharField(max_length=50, required=False, widget=forms.TextInput(attrs={'class': INPUT_CLASSES}))

    class Meta:
        model = SeoMeta
        fields = [
            'entity_type', 'entity_id',
            'seo_title', 'seo_description', 'seo_keywords', 'canonical_url', 'meta_robots', 'schema_markup',
            'open_graph_title', 'open_graph_description', 'open_graph_image',
            'twitter_card', 'twitter_title', 'twitter_description', 'twitter_image',
        ]
        widgets = {
            'entity_type': forms.Select(attrs={'class': INPUT_CLASSES}),
            'entity_id': forms.NumberInput(attrs={'class': INPUT_CLASSES}),
            'open_graph_title': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'open_graph_description': forms.Textarea(attrs={'rows': 2, 'class': INPUT_CLASSES}),
            'open_graph_image': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'twitter_title': forms.TextInput(attrs={'class': INPUT_CLASSES}),
            'twitter_description': forms.Textarea(attrs={'rows': 2, 'class': INPUT_CLASSES}),
            'twitter_image': forms.TextInput(attrs={'class': INPUT_CLASSES}),
        }

    def clean_meta_robots(self):
        return self.cleaned_data.get('meta_robots') or DEFAULT_ROBOTS

    def clean_twitter_card(self):
        return self.cleaned_data.get('twitter_card') or DEFAULT_TWITTER_CARD

    def clean_schema_markup(self):
        return self.cleaned_data.get('schema_markup') or {}

    def clean(self):
        cleaned_data = super().clean()
        entity_type = cleaned_data.get('entity_type')
        entity_id = cleaned_data.get('entity_id')

        if entity_type and entity_id is not None:
            model = get_entity_model(entity_type)
            if not model.objects.filter(pk=entity_id).exists():
                self.add_error('entity_id', f"No {entity_type} with id {entity_id} exists.")
        return cleaned_data
